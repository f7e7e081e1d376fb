"""Invoke the external documentation generator."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import shlex
import subprocess
from typing import Sequence

from docpublish.services.errors import BuildError


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandBuilder:
    """Run a documentation build command and locate the tree it produces."""

    command: Sequence[str]
    working_dir: Path
    output_dir: Path

    def build(self) -> Path:
        """Execute the build command, returning the generated output directory."""

        display = shlex.join(self.command)
        logger.info("Building documentation: %s", display)

        try:
            result = subprocess.run(
                list(self.command),
                cwd=self.working_dir,
                text=True,
                check=False,
                capture_output=True,
            )
        except FileNotFoundError as exc:
            raise BuildError(f"Build command not found: {self.command[0]}") from exc
        except OSError as exc:
            raise BuildError(f"Could not start build command '{display}'", diagnostic=str(exc)) from exc

        if result.returncode != 0:
            raise BuildError(
                f"Build command '{display}' exited with status {result.returncode}",
                diagnostic=result.stderr,
            )

        output = self.output_dir if self.output_dir.is_absolute() else self.working_dir / self.output_dir
        if not output.is_dir():
            raise BuildError(f"Build finished but output directory '{output}' does not exist")

        logger.debug("Build output located at %s", output)
        return output
