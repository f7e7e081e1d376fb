"""Configuration and result models for the documentation publisher."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import shlex

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_PROJECT_NAME = "runas"
DEFAULT_REMOTE_URL = "git@github.com:SonnyX/rust-runas.git"
DEFAULT_BRANCH_NAME = "gh-pages"
DEFAULT_BUILD_COMMAND = ("cargo", "rustdoc", "--release")
DEFAULT_OUTPUT_DIR = Path("target/doc")
DEFAULT_STAGING_DIR = Path(".gh-pages")
DEFAULT_COMMIT_MESSAGE = "Built documentation"


@dataclass(slots=True, frozen=True)
class PublishTarget:
    """Remote location the staging commit is force-pushed to."""

    remote_url: str
    branch_name: str
    remote_name: str = "origin"


@dataclass(slots=True)
class PublicationResult:
    """Outcome returned by the publisher after a successful run."""

    branch: str
    remote_url: str
    commit_hash: str
    files_published: int
    pushed: bool


class PublishConfig(BaseModel):
    """Validated settings for one publishing run."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(DEFAULT_PROJECT_NAME, description="Name interpolated into the redirect path.")
    remote_url: str = Field(DEFAULT_REMOTE_URL, description="Remote the publishing branch is pushed to.")
    branch_name: str = Field(DEFAULT_BRANCH_NAME, description="Branch overwritten on the remote.")
    remote_name: str = "origin"
    build_command: list[str] = Field(default_factory=lambda: list(DEFAULT_BUILD_COMMAND))
    output_dir: Path = DEFAULT_OUTPUT_DIR
    staging_dir: Path = DEFAULT_STAGING_DIR
    working_dir: Path = Field(default_factory=Path.cwd)
    commit_message: str = DEFAULT_COMMIT_MESSAGE
    author_name: str | None = None
    author_email: str | None = None
    dry_run: bool = False

    @field_validator("project_name")
    @classmethod
    def _ensure_project_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Project name must not be empty.")
        if "/" in cleaned or "\\" in cleaned:
            raise ValueError("Project name must not contain path separators.")
        return cleaned

    @field_validator("remote_url", "branch_name", "remote_name", "commit_message")
    @classmethod
    def _ensure_not_blank(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Value must not be empty.")
        return cleaned

    @field_validator("build_command", mode="before")
    @classmethod
    def _split_build_command(cls, value: object) -> object:
        if isinstance(value, str):
            value = shlex.split(value)
        if isinstance(value, (list, tuple)) and not value:
            raise ValueError("Build command must not be empty.")
        return value

    @field_validator("author_name", "author_email")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @property
    def target(self) -> PublishTarget:
        """Return the remote and branch the run publishes to."""

        return PublishTarget(remote_url=self.remote_url, branch_name=self.branch_name, remote_name=self.remote_name)

    def resolve(self, path: Path) -> Path:
        """Return ``path`` anchored at the configured working directory."""

        return path if path.is_absolute() else self.working_dir / path

    @property
    def output_path(self) -> Path:
        return self.resolve(self.output_dir)

    @property
    def staging_path(self) -> Path:
        return self.resolve(self.staging_dir)
