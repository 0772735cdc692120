from __future__ import annotations

import logging
from functools import wraps
from pathlib import Path
from typing import Callable, TypeVar

import typer
from ask_shell._internal.typer_command import configure_logging
from typer import Typer

from changelogger.errors import (
    ClassificationAborted,
    ConfigurationError,
    NoHumanRequiredError,
    RepositoryNotFound,
)
from changelogger.git_usage import open_repo
from changelogger.merge import read_changelog_section
from changelogger.settings import changelog_settings
from changelogger.version_bump import Version
from changelogger.workflows import ChangelogRequest, generate_changelog

T = TypeVar("T", bound=Callable)
logger = logging.getLogger(__name__)
app = Typer(
    name="changelogger", help="Generate or update CHANGELOG.md from git commits"
)
_fatal_errors = (
    ClassificationAborted,
    ConfigurationError,
    NoHumanRequiredError,
    RepositoryNotFound,
)


def exit_on_error(command: T) -> T:
    @wraps(command)
    def wrapper(*args, **kwargs):
        try:
            return command(*args, **kwargs)
        except _fatal_errors as e:
            logger.error(str(e))
            raise typer.Exit(1) from e

    return wrapper  # type: ignore


def _repo_root(repo: Path) -> Path:
    return Path(open_repo(repo).working_dir)


option_repo = typer.Option(
    Path("."),
    "-r",
    "--repo",
    help="Path to the repository, defaults to current directory",
)
option_output = typer.Option(
    None,
    "-o",
    "--output",
    envvar="CHANGELOGGER_OUTPUT",
    help="File to write the changelog to, defaults to CHANGELOG.md in the repository root",
)


@app.command()
@exit_on_error
def generate(
    repo: Path = option_repo,
    new_version: str | None = typer.Option(
        None,
        "--new-version",
        help="Optional new version, otherwise computed from commits",
    ),
    from_tag: str | None = typer.Option(
        None,
        "--from-tag",
        help="Optional tag to start from, otherwise latest semver tag is used",
    ),
    output: str | None = option_output,
    dry_run: bool | None = typer.Option(
        None,
        "--dry-run",
        envvar="CHANGELOGGER_DRY_RUN",
        help="Dry run, print to stdout instead of writing file",
    ),
    non_interactive: bool | None = typer.Option(
        None,
        "--non-interactive",
        envvar="CHANGELOGGER_NON_INTERACTIVE",
        help="Do not ask interactive questions, unknown commits become patch by default",
    ),
    tag_prefix: str | None = typer.Option(
        None,
        "--tag-prefix",
        envvar="CHANGELOGGER_TAG_PREFIX",
        help="{tag_prefix}{version} used in git tags. Uses project config or env var if not set.",
    ),
):
    """Classify the commits since the last release and add a new section to the changelog."""
    settings = changelog_settings(
        _repo_root(repo),
        output=output,
        tag_prefix=tag_prefix,
        non_interactive=non_interactive,
        dry_run=dry_run,
    )
    request = ChangelogRequest(
        settings=settings, new_version=new_version, from_tag=from_tag
    )
    result = generate_changelog(request)
    if not result.plan.has_section:
        logger.warning(f"{result.path} left unchanged")


@app.command()
@exit_on_error
def show(
    version: str = typer.Argument(..., help="Version to print, e.g. 1.2.0"),
    repo: Path = option_repo,
    output: str | None = option_output,
):
    """Print the changelog section of a released version."""
    settings = changelog_settings(_repo_root(repo), output=output)
    try:
        parsed_version = Version.parse(version)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
    path = settings.output_path
    if not path.exists():
        raise ConfigurationError(f"no changelog found @ {path}")
    try:
        section = read_changelog_section(path.read_text(), parsed_version)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
    typer.echo(section, nl=False)


def main():
    configure_logging(app)
    app()


if __name__ == "__main__":
    main()
