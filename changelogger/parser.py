from __future__ import annotations

import logging
import re
from typing import Iterable

from changelogger.models import ParsedCommit, RawCommit
from changelogger.version_bump import Version

logger = logging.getLogger(__name__)
_release_regex = re.compile(r"^->\s+(?P<version>v?\d+\.\d+\.\d+)$")
_scope_regex = re.compile(r"^(?P<type>[^(]*)\((?P<scope>[^)]*)\)(?P<rest>.*)$")
_issue_regex = re.compile(r"#(\d+)")


def is_release_message(subject: str) -> Version | None:
    """
    >>> is_release_message("-> v1.2.3")
    Version(major=1, minor=2, patch=3)
    >>> is_release_message("-> invalid") is None
    True
    """
    if match := _release_regex.match(subject.strip()):
        return Version.parse(match["version"])
    return None


def parse_issue_refs(text: str) -> list[int]:
    """
    >>> parse_issue_refs("fix leak (#38), see #38 and #7")
    [38, 38, 7]
    """
    return [int(number) for number in _issue_regex.findall(text)]


def _split_prefix(prefix: str) -> tuple[str | None, str | None]:
    """Returns (type_token, scope) or (None, None) if the prefix is not a commit type."""
    scope = None
    if scope_match := _scope_regex.match(prefix):
        if scope_match["rest"].strip():
            return None, None
        prefix = scope_match["type"]
        scope = scope_match["scope"].strip() or None
    type_token = prefix.strip()
    if not type_token or any(char.isspace() for char in type_token):
        return None, None
    return type_token, scope


def parse_commit(raw: RawCommit) -> ParsedCommit | None:
    subject = raw.subject.strip()
    if is_release_message(subject):
        logger.debug(f"skipping release commit {raw.hash}: {subject}")
        return None
    type_token = scope = None
    subject_text = subject
    prefix, colon, rest = subject.partition(":")
    if colon:
        type_token, scope = _split_prefix(prefix)
        if type_token is not None:
            subject_text = rest.strip()
    return ParsedCommit(
        hash=raw.hash,
        type_token=type_token,
        scope=scope,
        subject_text=subject_text,
        issue_refs=parse_issue_refs(subject_text),
    )


def parse_commits(raw_commits: Iterable[RawCommit]) -> list[ParsedCommit]:
    return [
        parsed for raw in raw_commits if (parsed := parse_commit(raw)) is not None
    ]


__all__ = [
    "is_release_message",
    "parse_commit",
    "parse_commits",
    "parse_issue_refs",
]
