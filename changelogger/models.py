from __future__ import annotations

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class Category(StrEnum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    IGNORED = "ignored"
    UNKNOWN = "unknown"

    @classmethod
    def rendered(cls) -> list[Category]:
        """Categories with a changelog heading, in rendering order."""
        return [cls.MAJOR, cls.MINOR, cls.PATCH]

    @property
    def heading(self) -> str:
        match self:
            case Category.MAJOR:
                return "Breaking changes"
            case Category.MINOR:
                return "New features"
            case Category.PATCH:
                return "Bug fixes"
            case Category.IGNORED | Category.UNKNOWN:
                raise ValueError(f"category {self} has no changelog heading")


class RawCommit(BaseModel):
    model_config = ConfigDict(frozen=True)

    hash: str
    subject: str
    body: str | None = None


class ParsedCommit(BaseModel):
    SHORT_HASH_LEN: ClassVar[int] = 7

    hash: str
    type_token: str | None = None
    scope: str | None = None
    subject_text: str
    issue_refs: list[int] = Field(default_factory=list)

    @property
    def short_hash(self) -> str:
        return self.hash[: self.SHORT_HASH_LEN]


class ClassifiedCommit(BaseModel):
    parsed: ParsedCommit
    category: Category


class PrefixRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str
    category: Category

    def matches(self, type_token: str) -> bool:
        return self.token == type_token.strip().lower()


class RemoteInfo(BaseModel):
    host: str = Field(description="Scheme and host, e.g. https://github.com")
    owner: str
    repo: str

    @property
    def base_url(self) -> str:
        return f"{self.host}/{self.owner}/{self.repo}"

    def commit_url(self, sha: str) -> str:
        return f"{self.base_url}/commit/{sha}"

    def issue_url(self, number: int) -> str:
        return f"{self.base_url}/issues/{number}"

    def compare_url(self, previous_tag: str, next_tag: str) -> str:
        return f"{self.base_url}/compare/{previous_tag}...{next_tag}"

    def release_url(self, tag: str) -> str:
        return f"{self.base_url}/releases/tag/{tag}"

