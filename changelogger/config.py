from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

from model_lib.serialize.parse import parse_dict
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class ProjectConfig(BaseModel):
    """The [tool.changelogger] table of a pyproject.toml."""

    model_config = ConfigDict(extra="ignore")
    TOOL_NAME: ClassVar[str] = "changelogger"
    DEFAULT_OUTPUT: ClassVar[str] = "CHANGELOG.md"
    DEFAULT_TAG_PREFIX: ClassVar[str] = "v"
    DEFAULT_TITLE: ClassVar[str] = "# Changelog"
    DEFAULT_FOOTER: ClassVar[str] = "--- Generated by changelogger"

    output: str = DEFAULT_OUTPUT
    tag_prefix: str = DEFAULT_TAG_PREFIX
    title: str = DEFAULT_TITLE
    footer: str = DEFAULT_FOOTER
    zero_major_unstable: bool = False


def load_project_config(project_dir: Path) -> ProjectConfig:
    pyproject_toml = project_dir / "pyproject.toml"
    if not pyproject_toml.exists():
        return ProjectConfig()
    pyproject = parse_dict(pyproject_toml)
    tool_config = pyproject.get("tool", {}).get(ProjectConfig.TOOL_NAME, {})
    if tool_config:
        logger.debug(f"using [tool.{ProjectConfig.TOOL_NAME}] from {pyproject_toml}")
    return ProjectConfig(
        **{key.replace("-", "_"): value for key, value in tool_config.items()}
    )
