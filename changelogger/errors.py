from pathlib import Path


class ConfigurationError(Exception):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class ClassificationAborted(Exception):
    def __init__(self, commit_hash: str, subject: str = "") -> None:
        self.commit_hash = commit_hash
        self.subject = subject
        super().__init__(
            f"Classification aborted at commit {commit_hash} {subject}".rstrip()
        )


class NoHumanRequiredError(Exception):
    def __init__(self, question_text: str):
        self.question_text = question_text
        super().__init__(f"Question asked but no human available: {question_text}")


class RemoteURLNotFound(Exception):
    def __init__(self, reason: str, path: Path):
        self.reason = reason
        self.path = path
        super().__init__(f"Could not find remote URL for git repo @ {path}: {reason}")


class RepositoryNotFound(Exception):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"No git repository found at or above {path}")
