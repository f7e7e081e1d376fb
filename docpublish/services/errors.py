"""Exceptions raised by the documentation publishing pipeline."""

from __future__ import annotations

from pathlib import Path


class DocPublishError(RuntimeError):
    """Base exception for failures that abort a publishing run."""

    exit_code = 1

    def __init__(self, message: str, *, diagnostic: str = "") -> None:
        super().__init__(message)
        self.diagnostic = diagnostic.strip()

    def __str__(self) -> str:
        message = super().__str__()
        if self.diagnostic:
            return f"{message}: {self.diagnostic}"
        return message


class ConfigError(DocPublishError):
    """Configuration is missing or invalid."""

    exit_code = 1


class BuildError(DocPublishError):
    """The documentation generator failed or produced no output."""

    exit_code = 2


class StagingError(DocPublishError):
    """The staging directory already exists or could not be created."""

    exit_code = 3


class RepoInitError(DocPublishError):
    """The staging repository could not be initialised."""

    exit_code = 4


class CopyError(DocPublishError):
    """A generated file could not be copied into the staging directory."""

    exit_code = 5

    def __init__(self, path: Path, *, diagnostic: str = "") -> None:
        super().__init__(f"Failed to copy '{path}'", diagnostic=diagnostic)
        self.path = path


class PublishError(DocPublishError):
    """Committing or pushing the publishing branch failed."""

    exit_code = 6


class GitCommandError(RuntimeError):
    """A git invocation exited with a non-zero status."""

    def __init__(self, command: tuple[str, ...], returncode: int, stderr: str) -> None:
        super().__init__(f"git {' '.join(command)} failed: {stderr.strip()}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr.strip()
