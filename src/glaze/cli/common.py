"""Shared CLI helpers."""

from __future__ import annotations

import json
import platform
from pathlib import Path
from typing import Any, NoReturn

import typer

from glaze._version import get_version
from glaze.core.errors import GlazeError, ThemeFileError
from glaze.core.ir import GlazeConfig
from glaze.core.theme_loader import load_theme_file
from glaze.theme import Theme


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"glaze {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def load_theme_or_exit(path: Path) -> tuple[Theme, GlazeConfig]:
    """Load a theme file, exiting with code 1 on any loading error."""
    try:
        return load_theme_file(path)
    except ThemeFileError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2))


def exit_on_error(e: GlazeError) -> NoReturn:
    """Report a Glaze error on stderr and exit with code 1."""
    typer.echo(f"Error: {e}", err=True)
    raise typer.Exit(code=1)
