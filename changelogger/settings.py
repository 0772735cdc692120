from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar

from pydantic import DirectoryPath, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from changelogger.config import ProjectConfig, load_project_config


class ChangelogSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CHANGELOGGER_")
    ENV_PREFIX: ClassVar[str] = "CHANGELOGGER_"

    repo_root: DirectoryPath
    output: str = Field(
        default=ProjectConfig.DEFAULT_OUTPUT,
        description="Changelog file, relative paths are resolved from the repo_root.",
    )
    tag_prefix: str = Field(
        default=ProjectConfig.DEFAULT_TAG_PREFIX,
        description="{tag_prefix}{version} used when looking up git tags and building release links.",
    )
    title: str = ProjectConfig.DEFAULT_TITLE
    footer: str = ProjectConfig.DEFAULT_FOOTER
    non_interactive: bool = Field(
        default=False,
        description="Never prompt, commits without a known prefix become patch changes.",
    )
    dry_run: bool = False
    zero_major_unstable: bool = Field(
        default=False,
        description="Before 1.0.0, breaking changes bump the minor and features the patch.",
    )

    @property
    def output_path(self) -> Path:
        path = Path(self.output)
        return path if path.is_absolute() else self.repo_root / path

    @classmethod
    def env_is_set(cls, field_name: str) -> bool:
        return f"{cls.ENV_PREFIX}{field_name}".upper() in os.environ


def changelog_settings(
    repo_root: Path,
    *,
    output: str | None = None,
    tag_prefix: str | None = None,
    non_interactive: bool | None = None,
    dry_run: bool | None = None,
) -> ChangelogSettings:
    # precedence: CLI arg -> Env var -> [tool.changelogger] in pyproject.toml -> Default
    project_config = load_project_config(repo_root)
    from_config = {
        name: value
        for name, value in project_config.model_dump(exclude_unset=True).items()
        if not ChangelogSettings.env_is_set(name)
    }
    cli_args = {
        name: value
        for name, value in {
            "output": output,
            "tag_prefix": tag_prefix,
            "non_interactive": non_interactive,
            "dry_run": dry_run,
        }.items()
        if value is not None
    }
    return ChangelogSettings(repo_root=repo_root, **{**from_config, **cli_args})

