from changelogger.classify import (
    PREFIX_RULES,
    ClassificationPolicy,
    NonInteractivePolicy,
    classify,
    classify_commits,
)
from changelogger.errors import (
    ClassificationAborted,
    ConfigurationError,
    NoHumanRequiredError,
    RemoteURLNotFound,
    RepositoryNotFound,
)
from changelogger.interactive import InteractivePolicy
from changelogger.merge import merge_changelog, parse_version_header, read_changelog_section
from changelogger.models import (
    Category,
    ClassifiedCommit,
    ParsedCommit,
    PrefixRule,
    RawCommit,
    RemoteInfo,
)
from changelogger.parser import is_release_message, parse_commit, parse_commits
from changelogger.render import ChangelogSection, build_section, render_section
from changelogger.version_bump import Version, next_version, parse_version_override
from changelogger.workflows import (
    ChangelogRequest,
    ReleasePlan,
    generate_changelog,
    plan_release,
)

VERSION = "0.1.0"
__all__ = (
    "PREFIX_RULES",
    "Category",
    "ChangelogRequest",
    "ChangelogSection",
    "ClassificationAborted",
    "ClassificationPolicy",
    "ClassifiedCommit",
    "ConfigurationError",
    "InteractivePolicy",
    "NoHumanRequiredError",
    "NonInteractivePolicy",
    "ParsedCommit",
    "PrefixRule",
    "RawCommit",
    "ReleasePlan",
    "RemoteInfo",
    "RemoteURLNotFound",
    "RepositoryNotFound",
    "Version",
    "build_section",
    "classify",
    "classify_commits",
    "generate_changelog",
    "is_release_message",
    "merge_changelog",
    "next_version",
    "parse_commit",
    "parse_commits",
    "parse_version_header",
    "parse_version_override",
    "plan_release",
    "read_changelog_section",
    "render_section",
)
