"""
Token exports for resolved colors.

Turns a resolved color map into flat token maps grouped by scheme variant,
tasty style-to-state bindings, plain JSON, or CSS custom property blocks.
All outputs are dicts of name -> color string in the requested syntax.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from .ir.colors import (
    ColorFormat,
    OutputModes,
    ResolvedColor,
    ResolvedColorVariant,
    SchemeVariant,
    StateAliases,
)
from .okhsl import format_hsl, format_okhsl, format_oklch, format_rgb

Formatter = Callable[[float, float, float], str]

FORMATTERS: dict[str, Formatter] = {
    ColorFormat.OKHSL: format_okhsl,
    ColorFormat.RGB: format_rgb,
    ColorFormat.HSL: format_hsl,
    ColorFormat.OKLCH: format_oklch,
}

DEFAULT_CSS_SUFFIX = "-color"

_CSS_VARIANTS: tuple[SchemeVariant, ...] = (
    SchemeVariant.LIGHT,
    SchemeVariant.DARK,
    SchemeVariant.LIGHT_CONTRAST,
    SchemeVariant.DARK_CONTRAST,
)


def format_variant(
    variant: ResolvedColorVariant,
    fmt: ColorFormat | str = ColorFormat.OKHSL,
) -> str:
    """Format one resolved variant in the requested syntax."""
    try:
        formatter = FORMATTERS[ColorFormat(fmt)]
    except ValueError:
        raise ValueError(
            f"Unknown color format {fmt!r}; expected one of {', '.join(FORMATTERS)}"
        ) from None
    return formatter(variant.h, variant.s * 100.0, variant.l * 100.0)


def enabled_variants(modes: OutputModes) -> list[SchemeVariant]:
    """Scheme variants included by the given output modes, in export order."""
    variants = [SchemeVariant.LIGHT]
    if modes.dark:
        variants.append(SchemeVariant.DARK)
    if modes.high_contrast:
        variants.append(SchemeVariant.LIGHT_CONTRAST)
    if modes.dark and modes.high_contrast:
        variants.append(SchemeVariant.DARK_CONTRAST)
    return variants


def build_flat_tokens(
    resolved: Mapping[str, ResolvedColor],
    modes: OutputModes,
    *,
    prefix: str = "",
    fmt: ColorFormat | str = ColorFormat.OKHSL,
) -> dict[str, dict[str, str]]:
    """Group tokens by variant: ``{"light": {"surface": "okhsl(...)"}, "dark": {...}}``."""
    variants = enabled_variants(modes)
    tokens: dict[str, dict[str, str]] = {str(v): {} for v in variants}
    for name, color in resolved.items():
        for variant in variants:
            tokens[variant][f"{prefix}{name}"] = format_variant(color.variant(variant), fmt)
    return tokens


def build_tasty_tokens(
    resolved: Mapping[str, ResolvedColor],
    states: StateAliases,
    modes: OutputModes,
    *,
    prefix: str = "",
    fmt: ColorFormat | str = ColorFormat.OKHSL,
) -> dict[str, dict[str, str]]:
    """Style-to-state bindings keyed by ``#name`` with state aliases as inner keys.

    The light value is the default state (``""``).
    """
    state_keys = {
        SchemeVariant.LIGHT: "",
        SchemeVariant.DARK: states.dark,
        SchemeVariant.LIGHT_CONTRAST: states.high_contrast,
        SchemeVariant.DARK_CONTRAST: f"{states.dark} & {states.high_contrast}",
    }
    variants = enabled_variants(modes)
    tokens: dict[str, dict[str, str]] = {}
    for name, color in resolved.items():
        tokens[f"#{prefix}{name}"] = {
            state_keys[variant]: format_variant(color.variant(variant), fmt)
            for variant in variants
        }
    return tokens


def build_json(
    resolved: Mapping[str, ResolvedColor],
    modes: OutputModes,
    *,
    fmt: ColorFormat | str = ColorFormat.OKHSL,
) -> dict[str, dict[str, str]]:
    """Per-color variant map: ``{"surface": {"light": ..., "dark": ...}}``."""
    variants = enabled_variants(modes)
    return {
        name: {str(variant): format_variant(color.variant(variant), fmt) for variant in variants}
        for name, color in resolved.items()
    }


def build_css(
    resolved: Mapping[str, ResolvedColor],
    *,
    prefix: str = "",
    suffix: str = DEFAULT_CSS_SUFFIX,
    fmt: ColorFormat | str = ColorFormat.RGB,
) -> dict[str, str]:
    """CSS custom property declarations for every variant.

    Returns:
        Dict with ``light``, ``dark``, ``lightContrast`` and ``darkContrast``
        keys, each a newline-joined block of ``--name-color: value;`` lines.
    """
    lines: dict[str, list[str]] = {str(variant): [] for variant in _CSS_VARIANTS}
    for name, color in resolved.items():
        prop = f"--{prefix}{name}{suffix}"
        for variant in _CSS_VARIANTS:
            lines[variant].append(f"{prop}: {format_variant(color.variant(variant), fmt)};")
    return {variant: "\n".join(block) for variant, block in lines.items()}
