"""Thin wrapper around the git command line used to assemble the publishing branch."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import subprocess

from docpublish.services.errors import GitCommandError


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GitRepository:
    """Run git commands inside a single working copy."""

    path: Path
    git_executable: str = "git"
    author_name: str | None = None
    author_email: str | None = None

    def init(self) -> None:
        self._run_git("init", "--quiet")

    def add_all(self) -> None:
        """Stage every file, including ones a global ignore file would hide."""

        self._run_git("add", "--force", "--all", ".")

    def commit(self, message: str) -> str:
        """Create a commit and return its hash."""

        self._run_git("commit", "--quiet", "-m", message)
        return self.head()

    def checkout_branch(self, name: str) -> None:
        """Create ``name`` at the current commit, resetting it if it already exists."""

        self._run_git("checkout", "--quiet", "-B", name)

    def set_remote(self, name: str, url: str) -> None:
        remotes = self._run_git("remote").stdout.split()
        if name in remotes:
            self._run_git("remote", "set-url", name, url)
        else:
            self._run_git("remote", "add", name, url)

    def push(self, remote: str, branch: str, *, force: bool = True) -> None:
        args = ["push", "--quiet"]
        if force:
            args.append("--force")
        self._run_git(*args, remote, f"{branch}:{branch}")

    def head(self) -> str:
        return self._run_git("rev-parse", "HEAD").stdout.strip()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _identity_args(self) -> list[str]:
        args: list[str] = []
        if self.author_name:
            args.extend(["-c", f"user.name={self.author_name}"])
        if self.author_email:
            args.extend(["-c", f"user.email={self.author_email}"])
        return args

    def _run_git(self, *args: str) -> subprocess.CompletedProcess[str]:
        """Execute a git command within the repository and raise on error."""

        command = [self.git_executable, *self._identity_args(), *args]
        logger.debug("Running %s in %s", " ".join(command), self.path)
        try:
            result = subprocess.run(
                command,
                cwd=self.path,
                text=True,
                check=False,
                capture_output=True,
            )
        except OSError as exc:
            raise GitCommandError(args, 127, str(exc)) from exc
        if result.returncode != 0:
            raise GitCommandError(args, result.returncode, result.stderr or result.stdout)
        return result
