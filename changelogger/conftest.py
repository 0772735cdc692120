import os
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from ask_shell._internal._run_env import interactive_shell
from git import Actor, Repo

from changelogger.models import RawCommit, RemoteInfo

GITHUB_REMOTE = "https://github.com/user/repo.git"
_TEST_ACTOR = Actor("Changelog Tester", "tester@example.com")
_START_TS = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith(("CHANGELOGGER_", "ASK_SHELL_FORCE_INTERACTIVE")):
            monkeypatch.delenv(name)
    interactive_shell.cache_clear()
    yield
    interactive_shell.cache_clear()


@pytest.fixture()
def remote() -> RemoteInfo:
    return RemoteInfo(host="https://github.com", owner="user", repo="repo")


def raw(subject: str, sha: str = "abc1234def5678") -> RawCommit:
    return RawCommit(hash=sha, subject=subject)


@dataclass
class GitRepoBuilder:
    path: Path
    repo: Repo
    commit_count: int = field(default=0, init=False)

    def commit(self, message: str) -> str:
        self.commit_count += 1
        file_path = self.path / "changes.txt"
        with file_path.open("a") as f:
            f.write(f"{self.commit_count}: {message}\n")
        self.repo.index.add([str(file_path)])
        ts = (_START_TS + timedelta(minutes=self.commit_count)).isoformat()
        commit = self.repo.index.commit(
            message,
            author=_TEST_ACTOR,
            committer=_TEST_ACTOR,
            author_date=ts,
            commit_date=ts,
        )
        return commit.hexsha

    def tag(self, name: str) -> None:
        self.repo.create_tag(name)

    def add_origin(self, url: str = GITHUB_REMOTE) -> None:
        self.repo.create_remote("origin", url)


@pytest.fixture()
def git_repo(tmp_path) -> GitRepoBuilder:
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    return GitRepoBuilder(path=repo_path, repo=Repo.init(repo_path))
