from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable

from model_lib.metadata.context_dict import identity

from changelogger.errors import ConfigurationError
from changelogger.models import Category

_version_regex = re.compile(r"^v?(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)$")


@dataclass(frozen=True, order=True)
class Version:
    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        if min(self.major, self.minor, self.patch) < 0:
            raise ValueError(f"negative version component: {self!r}")

    @classmethod
    def default(cls) -> Version:
        return cls(0, 0, 0)

    @classmethod
    def parse(cls, raw: str) -> Version:
        """
        >>> Version.parse("v1.2.3")
        Version(major=1, minor=2, patch=3)
        """
        match = _version_regex.match(raw.strip())
        if match is None:
            raise ValueError(f"Invalid version string: {raw}")
        return cls(int(match["major"]), int(match["minor"]), int(match["patch"]))

    def bump_major(self) -> Version:
        return Version(self.major + 1, 0, 0)

    def bump_minor(self) -> Version:
        return Version(self.major, self.minor + 1, 0)

    def bump_patch(self) -> Version:
        return Version(self.major, self.minor, self.patch + 1)

    def bump(self, category: Category) -> Version:
        return _bumps[category](self)

    @property
    def is_default(self) -> bool:
        return self == self.default()

    @property
    def is_unstable(self) -> bool:
        return self < Version(1, 0, 0)

    def as_tag(self, tag_prefix: str = "v") -> str:
        return f"{tag_prefix}{self}"

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


_bumps: dict[Category, Callable[[Version], Version]] = {
    Category.MAJOR: Version.bump_major,
    Category.MINOR: Version.bump_minor,
    Category.PATCH: Version.bump_patch,
    Category.IGNORED: identity,
    Category.UNKNOWN: identity,
}
# use compile time error if a Category is added without a bump method
_missing_bumps = [category for category in list(Category) if category not in _bumps]
assert not _missing_bumps, f"missing Category found for Version: {_missing_bumps}"


def max_bump_category(categories: Iterable[Category]) -> Category:
    """Highest precedence category present, IGNORED when nothing bumps."""
    present = set(categories)
    return next(
        (category for category in Category.rendered() if category in present),
        Category.IGNORED,
    )


def next_version(
    previous: Version,
    categories: Iterable[Category],
    *,
    zero_major_unstable: bool = False,
) -> Version:
    bump = max_bump_category(categories)
    if zero_major_unstable and previous.is_unstable:
        # 0.x releases: breaking changes only bump the minor, features the patch
        match bump:
            case Category.MAJOR:
                bump = Category.MINOR
            case Category.MINOR:
                bump = Category.PATCH
    return previous.bump(bump)


def parse_version_override(raw: str, previous: Version) -> Version:
    try:
        version = Version.parse(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"Provided version {raw!r} is not a valid MAJOR.MINOR.PATCH version"
        ) from e
    if version <= previous:
        raise ConfigurationError(
            f"New version {version} must be greater than previous version {previous}"
        )
    return version


__all__ = [
    "Version",
    "max_bump_category",
    "next_version",
    "parse_version_override",
]
