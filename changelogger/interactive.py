"""Terminal prompts for commits without a known prefix."""

from __future__ import annotations

import logging

from ask_shell._internal._run_env import interactive_shell
from ask_shell._internal.interactive import select_dict

from changelogger.errors import ClassificationAborted, NoHumanRequiredError
from changelogger.models import Category, ParsedCommit

logger = logging.getLogger(__name__)

CATEGORY_CHOICES: dict[str, Category] = {
    "patch": Category.PATCH,
    "minor": Category.MINOR,
    "major": Category.MAJOR,
    "ignore": Category.IGNORED,
}


def category_prompt(parsed: ParsedCommit) -> str:
    return f"Select type for commit {parsed.short_hash} {parsed.subject_text}"


class InteractivePolicy:
    """Asks the operator to pick a category, one commit at a time."""

    def __init__(self, default: Category = Category.PATCH) -> None:
        names = [name for name, category in CATEGORY_CHOICES.items() if category == default]
        assert names, f"invalid default: {default}"
        self.default = default
        self.default_name = names[0]

    def resolve(self, parsed: ParsedCommit) -> Category:
        prompt_text = category_prompt(parsed)
        if not interactive_shell():
            raise NoHumanRequiredError(prompt_text)
        try:
            chosen = select_dict(prompt_text, CATEGORY_CHOICES, default=self.default_name)
        except KeyboardInterrupt as e:
            raise ClassificationAborted(parsed.hash, parsed.subject_text) from e
        if chosen is None:
            raise ClassificationAborted(parsed.hash, parsed.subject_text)
        logger.info(f"{parsed.short_hash} classified as {chosen}")
        return chosen


__all__ = [
    "CATEGORY_CHOICES",
    "InteractivePolicy",
    "category_prompt",
]
