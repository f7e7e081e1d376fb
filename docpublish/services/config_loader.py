"""Load publisher settings from YAML files, environment variables and CLI flags."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError
import yaml

from docpublish.models.publisher import PublishConfig
from docpublish.services.errors import ConfigError


ENV_PREFIX = "DOCPUBLISH_"

_ENV_FIELDS: dict[str, str] = {
    "PROJECT_NAME": "project_name",
    "REMOTE_URL": "remote_url",
    "BRANCH": "branch_name",
    "REMOTE_NAME": "remote_name",
    "BUILD_COMMAND": "build_command",
    "OUTPUT_DIR": "output_dir",
    "STAGING_DIR": "staging_dir",
    "WORKING_DIR": "working_dir",
    "COMMIT_MESSAGE": "commit_message",
    "AUTHOR_NAME": "author_name",
    "AUTHOR_EMAIL": "author_email",
}


def load_config_file(path: Path) -> dict[str, Any]:
    """Parse a YAML mapping of publisher settings from ``path``."""

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Could not read config file '{path}'", diagnostic=str(exc)) from exc

    try:
        payload = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file '{path}' is not valid YAML", diagnostic=str(exc)) from exc

    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping of settings")

    values = {str(key).replace("-", "_"): value for key, value in payload.items()}
    # Relative paths in a config file are anchored at the file's directory.
    if "working_dir" not in values:
        values["working_dir"] = path.resolve().parent
    return values


def env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    """Return settings supplied through ``DOCPUBLISH_*`` environment variables."""

    values: dict[str, Any] = {}
    for suffix, field_name in _ENV_FIELDS.items():
        raw = environ.get(f"{ENV_PREFIX}{suffix}")
        if raw is not None and raw.strip():
            values[field_name] = raw.strip()
    return values


def build_config(
    file_values: Mapping[str, Any] | None = None,
    env_values: Mapping[str, Any] | None = None,
    cli_values: Mapping[str, Any] | None = None,
) -> PublishConfig:
    """Merge settings with precedence CLI > environment > file > defaults."""

    merged: dict[str, Any] = {}
    for layer in (file_values, env_values, cli_values):
        if layer:
            merged.update({key: value for key, value in layer.items() if value is not None})

    try:
        return PublishConfig(**merged)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'config'}: {error['msg']}" for error in exc.errors()
        )
        raise ConfigError("Invalid publisher configuration", diagnostic=details) from exc


__all__ = ["ENV_PREFIX", "build_config", "env_overrides", "load_config_file"]
