from __future__ import annotations

import logging
import re
from datetime import date
from typing import Iterable

from pydantic import BaseModel, Field

from changelogger.models import Category, ClassifiedCommit, RemoteInfo
from changelogger.version_bump import Version

logger = logging.getLogger(__name__)
_squashed_pr_regex = re.compile(r"(\s*\(#\d+\))+$")
DATE_FORMAT = "%Y-%m-%d"


class ChangelogSection(BaseModel):
    version: Version
    previous: Version | None = None
    release_date: date
    groups: dict[Category, list[ClassifiedCommit]] = Field(default_factory=dict)
    release_link: str | None = None
    compare_link: str | None = None

    @property
    def is_empty(self) -> bool:
        return not any(self.groups.values())


def group_commits(
    commits: Iterable[ClassifiedCommit],
) -> dict[Category, list[ClassifiedCommit]]:
    """Category -> commits in input order, only categories with a heading and at least one commit."""
    groups: dict[Category, list[ClassifiedCommit]] = {
        category: [] for category in Category.rendered()
    }
    for commit in commits:
        match commit.category:
            case Category.MAJOR | Category.MINOR | Category.PATCH:
                groups[commit.category].append(commit)
            case Category.IGNORED:
                continue
            case Category.UNKNOWN:
                raise ValueError(
                    f"commit {commit.parsed.short_hash} must be resolved before rendering"
                )
    return {category: group for category, group in groups.items() if group}


def build_section(
    commits: Iterable[ClassifiedCommit],
    *,
    version: Version,
    release_date: date,
    previous: Version | None = None,
    remote: RemoteInfo | None = None,
    tag_prefix: str = "v",
) -> ChangelogSection:
    release_link = compare_link = None
    if remote:
        release_link = remote.release_url(version.as_tag(tag_prefix))
        if previous is not None and not previous.is_default:
            compare_link = remote.compare_url(
                previous.as_tag(tag_prefix), version.as_tag(tag_prefix)
            )
    return ChangelogSection(
        version=version,
        previous=previous,
        release_date=release_date,
        groups=group_commits(commits),
        release_link=release_link,
        compare_link=compare_link,
    )


def as_changelog_line(commit: ClassifiedCommit, remote: RemoteInfo | None) -> str:
    parsed = commit.parsed
    title = _squashed_pr_regex.sub("", parsed.subject_text).strip()
    sha = parsed.short_hash
    if remote:
        commit_ref = f"[`{sha}`]({remote.commit_url(sha)})"
        issue_refs = [f"([#{n}]({remote.issue_url(n)}))" for n in parsed.issue_refs]
    else:
        commit_ref = f"`{sha}`"
        issue_refs = [f"(#{n})" for n in parsed.issue_refs]
    return " ".join([f"* {title}:", commit_ref, *issue_refs])


def section_header(section: ChangelogSection) -> str:
    date_str = section.release_date.strftime(DATE_FORMAT)
    if link := section.release_link:
        return f"## [Version {section.version}]({link}) ({date_str})"
    return f"## Version {section.version} ({date_str})"


def as_markdown(section: ChangelogSection, remote: RemoteInfo | None = None) -> str:
    changelog_md = [section_header(section)]
    for category in Category.rendered():
        if commits := section.groups.get(category):
            changelog_md.append("")
            changelog_md.append(f"### {category.heading}")
            changelog_md.extend(as_changelog_line(commit, remote) for commit in commits)
    if link := section.compare_link:
        changelog_md.append("")
        changelog_md.append(f"[...full changes]({link})")
    return "\n".join(changelog_md) + "\n"


def render_section(
    commits: Iterable[ClassifiedCommit],
    *,
    version: Version,
    release_date: date,
    previous: Version | None = None,
    remote: RemoteInfo | None = None,
    forced_version: bool = False,
    tag_prefix: str = "v",
) -> str | None:
    """Returns None when there is nothing to release and the version was not forced."""
    section = build_section(
        commits,
        version=version,
        release_date=release_date,
        previous=previous,
        remote=remote,
        tag_prefix=tag_prefix,
    )
    if section.is_empty and not forced_version:
        logger.info(f"no releasable commits for {version}, skipping section")
        return None
    return as_markdown(section, remote)


__all__ = [
    "ChangelogSection",
    "as_changelog_line",
    "as_markdown",
    "build_section",
    "group_commits",
    "render_section",
    "section_header",
]
