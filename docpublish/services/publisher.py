"""Publisher that pushes generated documentation to a hosting branch."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Callable, Protocol

from docpublish.models.publisher import PublicationResult, PublishConfig
from docpublish.services.builder import CommandBuilder
from docpublish.services.errors import CopyError, GitCommandError, PublishError, RepoInitError
from docpublish.services.git import GitRepository
from docpublish.services.redirect import REDIRECT_FILENAME, write_redirect
from docpublish.services.staging import copy_tree, staging_directory


logger = logging.getLogger(__name__)


class SupportsBuild(Protocol):
    """Documentation generator invoked before anything is staged."""

    def build(self) -> Path:
        """Produce the documentation tree and return its location."""


class SupportsVersionControl(Protocol):
    """Subset of :class:`GitRepository` used to assemble and push the branch."""

    def init(self) -> None:
        """Create an empty repository."""

    def add_all(self) -> None:
        """Stage every file in the working copy."""

    def commit(self, message: str) -> str:
        """Commit staged files and return the commit hash."""

    def checkout_branch(self, name: str) -> None:
        """Point ``name`` at the current commit."""

    def set_remote(self, name: str, url: str) -> None:
        """Register ``url`` under ``name``."""

    def push(self, remote: str, branch: str, *, force: bool = True) -> None:
        """Push ``branch`` to ``remote``."""


RepositoryFactory = Callable[[Path], SupportsVersionControl]


@dataclass(slots=True)
class DocsPublisher:
    """Build documentation, commit it to a throwaway repository and force-push it."""

    config: PublishConfig
    builder: SupportsBuild | None = None
    repository_factory: RepositoryFactory | None = None

    def publish(self) -> PublicationResult:
        """Run the pipeline, returning metadata about the published commit.

        The first failing stage raises its :class:`DocPublishError` subclass.
        The staging directory is always removed before the error propagates.
        """

        config = self.config
        output = self._builder().build()

        with staging_directory(config.staging_path) as staging:
            repository = self._repository(staging)

            try:
                repository.init()
            except GitCommandError as exc:
                raise RepoInitError("Could not initialise staging repository", diagnostic=exc.stderr) from exc

            files = copy_tree(output, staging)
            if not (staging / REDIRECT_FILENAME).exists():
                files += 1
            try:
                redirect = write_redirect(staging, config.project_name)
            except OSError as exc:
                raise CopyError(staging / REDIRECT_FILENAME, diagnostic=str(exc)) from exc
            logger.info("Wrote redirect %s -> ./%s/", redirect.name, config.project_name)

            commit_hash = self._commit_and_push(repository)

        return PublicationResult(
            branch=config.branch_name,
            remote_url=config.remote_url,
            commit_hash=commit_hash,
            files_published=files,
            pushed=not config.dry_run,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _builder(self) -> SupportsBuild:
        if self.builder is not None:
            return self.builder
        return CommandBuilder(
            command=self.config.build_command,
            working_dir=self.config.working_dir,
            output_dir=self.config.output_dir,
        )

    def _repository(self, path: Path) -> SupportsVersionControl:
        if self.repository_factory is not None:
            return self.repository_factory(path)
        return GitRepository(
            path=path,
            author_name=self.config.author_name,
            author_email=self.config.author_email,
        )

    def _commit_and_push(self, repository: SupportsVersionControl) -> str:
        target = self.config.target
        try:
            repository.add_all()
            commit_hash = repository.commit(self.config.commit_message)
            repository.checkout_branch(target.branch_name)
            repository.set_remote(target.remote_name, target.remote_url)
            if self.config.dry_run:
                logger.info("Dry run: skipping push of %s to %s", target.branch_name, target.remote_url)
                return commit_hash
            logger.info("Force-pushing %s to %s", target.branch_name, target.remote_url)
            repository.push(target.remote_name, target.branch_name, force=True)
        except GitCommandError as exc:
            raise PublishError(f"Publishing to {target.remote_url} failed", diagnostic=exc.stderr) from exc

        logger.info("Published %s at %s", target.branch_name, commit_hash)
        return commit_hash


__all__ = ["DocsPublisher", "RepositoryFactory", "SupportsBuild", "SupportsVersionControl"]
