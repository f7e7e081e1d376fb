from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from docpublish.services.builder import CommandBuilder
from docpublish.services.errors import BuildError


def test_build_returns_output_directory(project_dir: Path, python_command: Callable[[str], list[str]]) -> None:
    builder = CommandBuilder(
        command=python_command("pass"),
        working_dir=project_dir,
        output_dir=Path("target/doc"),
    )

    assert builder.build() == project_dir / "target" / "doc"


def test_build_runs_in_working_directory(tmp_path: Path, python_command: Callable[[str], list[str]]) -> None:
    builder = CommandBuilder(
        command=python_command("import pathlib; pathlib.Path('site').mkdir()"),
        working_dir=tmp_path,
        output_dir=Path("site"),
    )

    output = builder.build()

    assert output == tmp_path / "site"
    assert output.is_dir()


def test_build_failure_surfaces_stderr(tmp_path: Path, python_command: Callable[[str], list[str]]) -> None:
    builder = CommandBuilder(
        command=python_command("import sys; sys.stderr.write('error: could not compile'); sys.exit(101)"),
        working_dir=tmp_path,
        output_dir=Path("target/doc"),
    )

    with pytest.raises(BuildError) as excinfo:
        builder.build()

    assert excinfo.value.diagnostic == "error: could not compile"
    assert "101" in str(excinfo.value)
    assert excinfo.value.exit_code == 2


def test_build_missing_executable(tmp_path: Path) -> None:
    builder = CommandBuilder(
        command=["definitely-not-a-docs-generator"],
        working_dir=tmp_path,
        output_dir=Path("target/doc"),
    )

    with pytest.raises(BuildError, match="not found"):
        builder.build()


def test_build_without_output_directory_fails(
    tmp_path: Path, python_command: Callable[[str], list[str]]
) -> None:
    builder = CommandBuilder(command=python_command("pass"), working_dir=tmp_path, output_dir=Path("target/doc"))

    with pytest.raises(BuildError, match="does not exist"):
        builder.build()
