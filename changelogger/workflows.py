"""Run pipeline: repository -> classification -> version -> markdown -> changelog file."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field
from rich.console import Console
from zero_3rdparty.file_utils import ensure_parents_write_text

from changelogger.classify import (
    ClassificationPolicy,
    NonInteractivePolicy,
    classify_commits,
)
from changelogger.errors import RemoteURLNotFound
from changelogger.git_usage import (
    commits_since,
    find_latest_semver_tag,
    find_tag,
    open_repo,
    read_remote_info,
)
from changelogger.interactive import InteractivePolicy
from changelogger.merge import has_version, merge_changelog
from changelogger.models import RawCommit, RemoteInfo
from changelogger.parser import parse_commits
from changelogger.render import render_section
from changelogger.settings import ChangelogSettings
from changelogger.version_bump import Version, next_version, parse_version_override

logger = logging.getLogger(__name__)


class ChangelogRequest(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    settings: ChangelogSettings
    new_version: str | None = Field(
        default=None, description="Explicit version, skips the version calculation"
    )
    from_tag: str | None = Field(
        default=None, description="Start tag, defaults to the latest semver tag"
    )
    release_date: date = Field(default_factory=date.today)
    policy: ClassificationPolicy | None = Field(
        default=None, description="Defaults to interactive unless non_interactive"
    )


@dataclass
class ReleasePlan:
    previous: Version
    version: Version
    section: str | None

    @property
    def has_section(self) -> bool:
        return self.section is not None


@dataclass
class ChangelogResult:
    plan: ReleasePlan
    path: Path
    content: str | None = None
    written: bool = False


def default_policy(settings: ChangelogSettings) -> ClassificationPolicy:
    if settings.non_interactive:
        return NonInteractivePolicy()
    return InteractivePolicy()


def plan_release(
    raw_commits: Sequence[RawCommit],
    *,
    policy: ClassificationPolicy,
    release_date: date,
    previous: Version | None = None,
    new_version: str | None = None,
    remote: RemoteInfo | None = None,
    tag_prefix: str = "v",
    zero_major_unstable: bool = False,
) -> ReleasePlan:
    """The engine: no I/O besides the policy calls.

    previous=None means no earlier release, versions start from 0.0.0 and no compare link is rendered.
    """
    previous_version = previous or Version.default()
    forced = None
    if new_version is not None:
        forced = parse_version_override(new_version, previous_version)
    classified = classify_commits(parse_commits(raw_commits), policy)
    if forced is None:
        version = next_version(
            previous_version,
            (commit.category for commit in classified),
            zero_major_unstable=zero_major_unstable,
        )
    else:
        version = forced
    if version == previous_version:
        logger.warning("No important commits found, nothing to put into changelog")
        return ReleasePlan(previous_version, version, None)
    logger.info(f"previous version {previous_version} -> new version {version}")
    section = render_section(
        classified,
        version=version,
        release_date=release_date,
        previous=previous,
        remote=remote,
        forced_version=forced is not None,
        tag_prefix=tag_prefix,
    )
    return ReleasePlan(previous_version, version, section)


def _read_remote(repo) -> RemoteInfo | None:
    try:
        return read_remote_info(repo)
    except RemoteURLNotFound as e:
        logger.warning(repr(e))
        return None


def write_changelog(
    settings: ChangelogSettings, plan: ReleasePlan, console: Console | None = None
) -> ChangelogResult:
    path = settings.output_path
    result = ChangelogResult(plan=plan, path=path)
    if not plan.has_section:
        return result
    existing = path.read_text() if path.exists() else None
    if existing and has_version(existing, plan.version):
        logger.warning(f"{path} already has a section for {plan.version}")
    result.content = merge_changelog(
        existing, plan.section, title=settings.title, footer=settings.footer
    )
    if settings.dry_run:
        console = console or Console()
        console.print(plan.section, markup=False, highlight=False, soft_wrap=True)
        return result
    ensure_parents_write_text(path, result.content)
    result.written = True
    logger.info(f"updated {path}")
    return result


def generate_changelog(
    request: ChangelogRequest, console: Console | None = None
) -> ChangelogResult:
    settings = request.settings
    repo = open_repo(settings.repo_root)
    if request.from_tag:
        start_tag = find_tag(repo, request.from_tag, settings.tag_prefix)
    else:
        start_tag = find_latest_semver_tag(repo, settings.tag_prefix)
    if start_tag:
        logger.info(f"latest tag is {start_tag.name} (commit {start_tag.sha})")
    else:
        logger.info(
            "no semver git tags found, assuming previous version 0.0.0 and using full history"
        )
    raw_commits = commits_since(repo, start_tag.sha if start_tag else None)
    if not raw_commits:
        logger.warning("No commits found since starting point")
    plan = plan_release(
        raw_commits,
        policy=request.policy or default_policy(settings),
        release_date=request.release_date,
        previous=start_tag.version if start_tag else None,
        new_version=request.new_version,
        remote=_read_remote(repo),
        tag_prefix=settings.tag_prefix,
        zero_major_unstable=settings.zero_major_unstable,
    )
    return write_changelog(settings, plan, console)
