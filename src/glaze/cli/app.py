"""
Glaze command line interface.

Commands:
- resolve: Resolve a theme file and print JSON
- css: Print CSS custom property blocks for a theme file
- contrast: Print the WCAG contrast ratio between two hex colors
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from glaze.cli.common import echo_json, exit_on_error, load_theme_or_exit, version_callback
from glaze.core.contrast import resolve_min_contrast
from glaze.core.errors import GlazeError, InvalidHexColorError
from glaze.core.export import DEFAULT_CSS_SUFFIX
from glaze.core.ir import ColorFormat, ContrastPreset
from glaze.core.okhsl import (
    RGB,
    contrast_ratio,
    parse_hex,
    relative_luminance,
    srgb_to_linear,
)

console = Console()

app = typer.Typer(
    help="Glaze: OKHSL color themes with automatic WCAG contrast solving.",
    no_args_is_help=True,
)


class ExportStyle(StrEnum):
    JSON = "json"
    TOKENS = "tokens"
    TASTY = "tasty"


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
) -> None:
    """Glaze CLI main callback for global options."""
    pass


@app.command("resolve")
def resolve_command(
    file: Path = typer.Argument(..., help="Theme YAML file"),
    fmt: ColorFormat = typer.Option(ColorFormat.OKHSL, "--format", "-f", help="Color syntax"),
    style: ExportStyle = typer.Option(
        ExportStyle.JSON, "--style", "-s", help="Output shape (json/tokens/tasty)"
    ),
    high_contrast: bool | None = typer.Option(
        None, "--high-contrast/--no-high-contrast", help="Include high-contrast variants"
    ),
    dark: bool | None = typer.Option(None, "--dark/--no-dark", help="Include dark variants"),
) -> None:
    """
    Resolve every color in a theme file and print the result as JSON.

    Mode flags override the file's ``config.modes``.
    """
    theme, _ = load_theme_or_exit(file)
    try:
        if style == ExportStyle.TOKENS:
            data = theme.tokens(fmt=fmt, dark=dark, high_contrast=high_contrast)
        elif style == ExportStyle.TASTY:
            data = theme.tasty(fmt=fmt, dark=dark, high_contrast=high_contrast)
        else:
            data = theme.json(fmt=fmt, dark=dark, high_contrast=high_contrast)
    except GlazeError as e:
        exit_on_error(e)
    echo_json(data)


@app.command("css")
def css_command(
    file: Path = typer.Argument(..., help="Theme YAML file"),
    fmt: ColorFormat = typer.Option(ColorFormat.RGB, "--format", "-f", help="Color syntax"),
    suffix: str = typer.Option(DEFAULT_CSS_SUFFIX, "--suffix", help="Custom property suffix"),
) -> None:
    """Print CSS custom property declarations for all four scheme variants."""
    theme, _ = load_theme_or_exit(file)
    try:
        blocks = theme.css(fmt=fmt, suffix=suffix)
    except GlazeError as e:
        exit_on_error(e)

    for i, (variant, block) in enumerate(blocks.items()):
        if i:
            typer.echo("")
        typer.echo(f"/* {variant} */")
        if block:
            typer.echo(block)


def _linear_rgb(value: str) -> RGB:
    rgb = parse_hex(value)
    if rgb is None:
        raise InvalidHexColorError(value)
    r, g, b = rgb
    return (srgb_to_linear(r), srgb_to_linear(g), srgb_to_linear(b))


@app.command("contrast")
def contrast_command(
    foreground: str = typer.Argument(..., help="Foreground color (#rgb or #rrggbb)"),
    background: str = typer.Argument(..., help="Background color (#rgb or #rrggbb)"),
) -> None:
    """Print the WCAG 2 contrast ratio between two colors and which presets pass."""
    try:
        ratio = contrast_ratio(
            relative_luminance(_linear_rgb(foreground)),
            relative_luminance(_linear_rgb(background)),
        )
    except GlazeError as e:
        exit_on_error(e)

    typer.echo(f"Contrast ratio: {ratio:.2f}:1")

    table = Table(title="WCAG presets")
    table.add_column("Preset", style="cyan")
    table.add_column("Target", justify="right")
    table.add_column("Result")
    for preset in ContrastPreset:
        target = resolve_min_contrast(preset)
        verdict = "[green]pass[/green]" if ratio >= target else "[red]fail[/red]"
        table.add_row(str(preset), f"{target:g}", verdict)
    console.print(table)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main()
