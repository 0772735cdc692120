from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Iterable

from changelogger.render import DATE_FORMAT
from changelogger.version_bump import Version

logger = logging.getLogger(__name__)
_section_end_regex = re.compile(r"^(##(?!#)\s|--- )", re.M)
_version_header_regex = re.compile(
    r"^##\s+\[?Version\s+(?P<version>\d+\.\d+\.\d+)\]?(?:\([^)\s]*\))?\s+\((?P<date>\d{4}-\d{2}-\d{2})\)",
    re.M,
)


def parse_version_header(line: str) -> tuple[Version, date] | None:
    """
    >>> parse_version_header("## Version 1.2.0 (2024-03-01)")
    (Version(major=1, minor=2, patch=0), datetime.date(2024, 3, 1))
    >>> parse_version_header("### Bug fixes") is None
    True
    """
    if match := _version_header_regex.match(line.strip()):
        release_date = datetime.strptime(match["date"], DATE_FORMAT).date()
        return Version.parse(match["version"]), release_date
    return None


def iter_version_headers(content: str) -> Iterable[tuple[Version, date]]:
    for match in _version_header_regex.finditer(content):
        if parsed := parse_version_header(match.group(0)):
            yield parsed


def has_version(content: str, version: Version) -> bool:
    return any(found == version for found, _ in iter_version_headers(content))


def read_changelog_section(content: str, version: Version) -> str:
    for match in _version_header_regex.finditer(content):
        if Version.parse(match["version"]) != version:
            continue
        section_end = len(content)
        if next_section := _section_end_regex.search(content, match.end()):
            section_end = next_section.start()
        return content[match.start() : section_end].strip() + "\n"
    raise ValueError(f"unable to find {version} in changelog")


def merge_changelog(
    existing: str | None,
    new_section: str,
    *,
    title: str | None = None,
    footer: str | None = None,
) -> str:
    """Places new_section before the newest existing version section.

    Other `## ` headings above it, such as `## [Unreleased]`, stay where they are.

    Merging the same section twice adds it twice, callers must check `has_version` first.
    """
    new_section = new_section.rstrip("\n")
    if existing is None or not existing.strip():
        parts = [part for part in (title, new_section, footer) if part]
        return "\n\n".join(parts) + "\n"
    new_section += "\n\n"
    if first_version := _version_header_regex.search(existing):
        insert_point = first_version.start()
        return existing[:insert_point] + new_section + existing[insert_point:]
    # no version sections yet, appending after the preamble
    trailing_newlines = len(existing) - len(existing.rstrip("\n"))
    return existing + "\n" * max(0, 2 - trailing_newlines) + new_section


__all__ = [
    "has_version",
    "iter_version_headers",
    "merge_changelog",
    "parse_version_header",
    "read_changelog_section",
]
