"""Shared fixtures and helpers for the test suite."""

from __future__ import annotations

from pathlib import Path
import subprocess
import sys
from typing import Callable

import pytest


def _run_git(*args: str, cwd: Path) -> str:
    result = subprocess.run(["git", *args], cwd=cwd, check=True, text=True, capture_output=True)
    return result.stdout.strip()


def _python_command(source: str) -> list[str]:
    return [sys.executable, "-c", source]


@pytest.fixture
def git() -> Callable[..., str]:
    """Return a helper that runs git in ``cwd`` and returns its stripped stdout."""

    return _run_git


@pytest.fixture
def python_command() -> Callable[[str], list[str]]:
    """Return a helper building a command that runs Python source with the current interpreter."""

    return _python_command


@pytest.fixture(autouse=True)
def git_identity(monkeypatch: pytest.MonkeyPatch) -> None:
    """Give git a fixed identity and date so commits are reproducible."""

    monkeypatch.setenv("GIT_AUTHOR_NAME", "Docs Bot")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "docs@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Docs Bot")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "docs@example.com")
    monkeypatch.setenv("GIT_AUTHOR_DATE", "2024-01-01T00:00:00+00:00")
    monkeypatch.setenv("GIT_COMMITTER_DATE", "2024-01-01T00:00:00+00:00")


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Return a project root whose ``target/doc`` tree looks like rustdoc output."""

    root = tmp_path / "project"
    docs = root / "target" / "doc"
    (docs / "runas").mkdir(parents=True)
    (docs / "runas" / "index.html").write_text("<h1>runas</h1>\n", encoding="utf-8")
    (docs / "runas" / "fn.run.html").write_text("<h1>run</h1>\n", encoding="utf-8")
    (docs / "static.files").mkdir()
    (docs / "static.files" / "main.js").write_text("console.log('docs');\n", encoding="utf-8")
    (docs / "search-index.js").write_text("var searchIndex = {};\n", encoding="utf-8")
    return root


@pytest.fixture
def bare_remote(tmp_path: Path) -> Path:
    """Return a bare repository standing in for the hosting remote."""

    remote = tmp_path / "remote.git"
    remote.mkdir()
    _run_git("init", "--bare", "--quiet", cwd=remote)
    return remote
