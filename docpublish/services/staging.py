"""Staging area lifecycle and artifact copying."""

from __future__ import annotations

from contextlib import contextmanager
import logging
import os
from pathlib import Path
import shutil
from typing import Iterator

from docpublish.services.errors import CopyError, StagingError


logger = logging.getLogger(__name__)


@contextmanager
def staging_directory(path: Path) -> Iterator[Path]:
    """Create ``path`` for the duration of the block and always remove it afterwards.

    The directory must not exist beforehand. Removal runs on every exit path,
    including exceptions raised inside the block and ``KeyboardInterrupt``. A
    failure to remove the directory is logged rather than raised so that it
    never hides the error that ended the block.
    """

    if path.exists() or path.is_symlink():
        raise StagingError(f"Staging directory '{path}' already exists")

    created_parents = [parent for parent in path.parents if not parent.exists()]

    try:
        path.mkdir(parents=True)
    except OSError as exc:
        _remove_parents(created_parents)
        raise StagingError(f"Could not create staging directory '{path}'", diagnostic=str(exc)) from exc

    logger.info("Created staging directory %s", path)
    try:
        yield path
    finally:
        _remove_tree(path)
        _remove_parents(created_parents)


def _remove_tree(path: Path) -> None:
    try:
        shutil.rmtree(path)
    except OSError:
        logger.exception("Failed to remove staging directory %s", path)
    else:
        logger.info("Removed staging directory %s", path)


def _remove_parents(parents: list[Path]) -> None:
    """Remove the now-empty parent directories created for the staging area, deepest first."""

    for parent in parents:
        if not parent.exists():
            continue
        try:
            parent.rmdir()
        except OSError:
            logger.warning("Could not remove directory %s created for staging", parent)
            return


def copy_tree(source: Path, destination: Path) -> int:
    """Copy every file below ``source`` into ``destination``, returning the file count.

    Relative structure is preserved. Symbolic links are followed so the
    published tree only holds regular files.
    """

    if not source.is_dir():
        raise CopyError(source, diagnostic="source is not a directory")

    def _walk_error(exc: OSError) -> None:
        raise CopyError(Path(exc.filename or source), diagnostic=exc.strerror or str(exc)) from exc

    copied = 0
    for root, dirnames, filenames in os.walk(source, onerror=_walk_error, followlinks=True):
        dirnames.sort()
        root_path = Path(root)
        target_root = destination / root_path.relative_to(source)
        try:
            target_root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CopyError(root_path, diagnostic=str(exc)) from exc

        for filename in sorted(filenames):
            src = root_path / filename
            try:
                shutil.copyfile(src, target_root / filename)
            except OSError as exc:
                raise CopyError(src, diagnostic=exc.strerror or str(exc)) from exc
            copied += 1

    logger.info("Copied %d files from %s", copied, source)
    return copied
