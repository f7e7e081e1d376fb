"""Render the index page that forwards visitors to the generated crate docs."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Template


REDIRECT_FILENAME = "index.html"

REDIRECT_TEMPLATE = Template(
    """<!doctype html>
<title>{{ project_name }}</title>
<meta http-equiv="refresh" content="0; ./{{ project_name }}/">
""",
    autoescape=True,
    keep_trailing_newline=True,
)


def render_redirect(project_name: str) -> str:
    """Return the redirect document pointing at ``./<project_name>/``."""

    return REDIRECT_TEMPLATE.render(project_name=project_name)


def write_redirect(directory: Path, project_name: str) -> Path:
    """Write the redirect document at the root of ``directory``."""

    destination = directory / REDIRECT_FILENAME
    destination.write_text(render_redirect(project_name), encoding="utf-8")
    return destination


__all__ = ["REDIRECT_FILENAME", "render_redirect", "write_redirect"]
