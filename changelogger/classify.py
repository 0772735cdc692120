from __future__ import annotations

import logging
from typing import Iterable, Protocol, runtime_checkable

from changelogger.models import Category, ClassifiedCommit, ParsedCommit, PrefixRule

logger = logging.getLogger(__name__)


def _rules(category: Category, *tokens: str) -> list[PrefixRule]:
    return [PrefixRule(token=token, category=category) for token in tokens]


PREFIX_RULES: tuple[PrefixRule, ...] = (
    *_rules(Category.MAJOR, "breaking", "major"),
    *_rules(Category.MINOR, "feat", "minor"),
    *_rules(
        Category.PATCH, "fix", "fixes", "perf", "refactor", "patch", "tweak", "tweaks"
    ),
    *_rules(Category.IGNORED, "docs", "doc", "style", "chore", "test"),
)
_tokens = [rule.token for rule in PREFIX_RULES]
assert len(_tokens) == len(set(_tokens)), f"duplicate prefix tokens: {_tokens}"
_BARE_PATCH_SUBJECTS = {"tweak", "tweaks"}


@runtime_checkable
class ClassificationPolicy(Protocol):
    def resolve(self, parsed: ParsedCommit) -> Category: ...


class NonInteractivePolicy:
    """Unknown commits become patch releases."""

    def resolve(self, parsed: ParsedCommit) -> Category:
        logger.info(
            f"no known prefix for {parsed.short_hash} '{parsed.subject_text}', using {Category.PATCH}"
        )
        return Category.PATCH


def lookup_prefix(
    type_token: str | None, rules: Iterable[PrefixRule] = PREFIX_RULES
) -> Category:
    if type_token is None:
        return Category.UNKNOWN
    return next(
        (rule.category for rule in rules if rule.matches(type_token)),
        Category.UNKNOWN,
    )


def auto_category(parsed: ParsedCommit) -> Category:
    bare_subject = parsed.subject_text.strip().lower()
    if parsed.type_token is None and bare_subject in _BARE_PATCH_SUBJECTS:
        return Category.PATCH
    return lookup_prefix(parsed.type_token)


def classify(parsed: ParsedCommit, policy: ClassificationPolicy) -> ClassifiedCommit:
    category = auto_category(parsed)
    match category:
        case Category.UNKNOWN:
            category = policy.resolve(parsed)
            if category == Category.UNKNOWN:
                raise ValueError(
                    f"policy {type(policy).__name__} returned {Category.UNKNOWN} for {parsed.short_hash}"
                )
        case Category.MAJOR | Category.MINOR | Category.PATCH | Category.IGNORED:
            pass
    return ClassifiedCommit(parsed=parsed, category=category)


def classify_commits(
    parsed_commits: Iterable[ParsedCommit], policy: ClassificationPolicy
) -> list[ClassifiedCommit]:
    return [classify(parsed, policy) for parsed in parsed_commits]


__all__ = [
    "PREFIX_RULES",
    "ClassificationPolicy",
    "NonInteractivePolicy",
    "auto_category",
    "classify",
    "classify_commits",
    "lookup_prefix",
]
