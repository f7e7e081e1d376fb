"""Build the project documentation and force-push it to the hosting branch.

The command takes no arguments in its minimal form; defaults reproduce the
original ``upload-docs.sh`` workflow (``cargo rustdoc --release`` published to
``gh-pages``). Every setting can be supplied through a YAML file (``--config``),
``DOCPUBLISH_*`` environment variables or command-line flags, in increasing
order of precedence.

Exit codes: 0 on success, 1 for configuration problems, 2 build, 3 staging,
4 repository init, 5 copy and 6 commit/push failures.
"""
from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
import sys
from typing import Any

from docpublish.services.config_loader import build_config, env_overrides, load_config_file
from docpublish.services.errors import DocPublishError
from docpublish.services.publisher import DocsPublisher


LOGGER = logging.getLogger("docpublish.publish")


def _configure_logging() -> None:
    level_name = os.getenv("DOCPUBLISH_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="publish", description="Publish generated documentation to a hosting branch.")
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file with publisher settings (default from DOCPUBLISH_CONFIG).",
    )
    parser.add_argument("--project-name", dest="project_name", help="Name used for the redirect path ./<name>/.")
    parser.add_argument("--remote-url", dest="remote_url", help="Remote the documentation branch is pushed to.")
    parser.add_argument("--branch", dest="branch_name", help="Branch overwritten on the remote (default gh-pages).")
    parser.add_argument("--build-command", dest="build_command", help="Command that generates the documentation.")
    parser.add_argument("--output-dir", dest="output_dir", type=Path, help="Directory the build command writes to.")
    parser.add_argument("--staging-dir", dest="staging_dir", type=Path, help="Temporary directory for the publish repo.")
    parser.add_argument("--working-dir", dest="working_dir", type=Path, help="Project root the paths are relative to.")
    parser.add_argument("--commit-message", dest="commit_message", help="Message for the documentation commit.")
    parser.add_argument("--author-name", dest="author_name", help="Commit author name passed to git.")
    parser.add_argument("--author-email", dest="author_email", help="Commit author email passed to git.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Build, stage and commit without pushing.",
    )
    return parser.parse_args(argv)


def _cli_values(args: argparse.Namespace) -> dict[str, Any]:
    values = vars(args).copy()
    values.pop("config", None)
    return values


def run(argv: list[str] | None = None, environ: dict[str, str] | None = None) -> int:
    _configure_logging()
    args = _parse_args(argv)
    environ = dict(os.environ) if environ is None else environ

    config_path = args.config or (Path(environ["DOCPUBLISH_CONFIG"]) if environ.get("DOCPUBLISH_CONFIG") else None)

    try:
        file_values = load_config_file(config_path) if config_path else None
        config = build_config(file_values, env_overrides(environ), _cli_values(args))
        result = DocsPublisher(config).publish()
    except DocPublishError as exc:
        LOGGER.error("%s", exc)
        return exc.exit_code
    except KeyboardInterrupt:
        LOGGER.error("Interrupted; staging directory cleanup was attempted")
        return 130

    if result.pushed:
        LOGGER.info("Published %d files to %s (%s) at %s", result.files_published, result.remote_url, result.branch, result.commit_hash)
    else:
        LOGGER.info("Dry run complete: %d files committed at %s", result.files_published, result.commit_hash)
    return 0


def main() -> None:  # pragma: no cover - console script entry point
    raise SystemExit(run(sys.argv[1:]))


if __name__ == "__main__":  # pragma: no cover - script entry point
    main()
