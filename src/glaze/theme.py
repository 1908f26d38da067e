"""
Theme, palette and standalone color token API.

A :class:`Theme` holds a hue/saturation seed and a mutable map of color
definitions. Every export resolves the current definitions afresh, so
mutations between calls are always reflected.

    primary = glaze(280, 80)
    primary.colors({
        "surface": {"lightness": 97, "saturation": 0.75},
        "text": {"base": "surface", "lightness": "-52", "contrast": "AAA"},
    })
    primary.tokens()
    # {"light": {"surface": "okhsl(...)", ...}, "dark": {...}}
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .core.contrast import LuminanceCache
from .core.errors import InvalidHexColorError
from .core.export import (
    DEFAULT_CSS_SUFFIX,
    build_css,
    build_flat_tokens,
    build_json,
    build_tasty_tokens,
)
from .core.ir.colors import (
    DEFAULT_CONFIG,
    AdaptationMode,
    ColorDefinition,
    ColorFormat,
    ColorMap,
    GlazeConfig,
    OutputModes,
    ResolvedColor,
    StateAliases,
    ThemeExport,
)
from .core.okhsl import parse_hex, srgb_to_okhsl
from .core.resolver import coerce_color_map, resolve_colors

DefinitionInput = ColorDefinition | Mapping[str, Any]
PrefixOption = bool | Mapping[str, str] | None


def _modes(config: GlazeConfig, dark: bool | None, high_contrast: bool | None) -> OutputModes:
    return OutputModes(
        dark=config.modes.dark if dark is None else dark,
        high_contrast=config.modes.high_contrast if high_contrast is None else high_contrast,
    )


def _states(config: GlazeConfig, states: Mapping[str, str] | StateAliases | None) -> StateAliases:
    if states is None:
        return config.states
    if isinstance(states, StateAliases):
        return states
    return StateAliases(**{**config.states.model_dump(), **states})


# =============================================================================
# Theme
# =============================================================================


class Theme:
    """A single-hue color theme."""

    def __init__(
        self,
        hue: float,
        saturation: float = 100.0,
        colors: Mapping[str, DefinitionInput] | None = None,
        *,
        config: GlazeConfig | None = None,
        cache: LuminanceCache | None = None,
    ):
        self._hue = hue
        self._saturation = saturation
        self._defs: ColorMap = coerce_color_map(colors or {})
        self.config = config or DEFAULT_CONFIG
        self.cache = cache

    def __repr__(self) -> str:
        return f"Theme(hue={self._hue}, saturation={self._saturation}, colors={len(self._defs)})"

    @property
    def hue(self) -> float:
        """The seed hue (0-360)."""
        return self._hue

    @property
    def saturation(self) -> float:
        """The seed saturation (0-100)."""
        return self._saturation

    # -- definitions -----------------------------------------------------------

    def colors(self, defs: Mapping[str, DefinitionInput]) -> Theme:
        """Add or replace color definitions (additive merge). Returns self."""
        self._defs.update(coerce_color_map(defs))
        return self

    def color(self, name: str) -> ColorDefinition | None:
        """Get a color definition by name."""
        return self._defs.get(name)

    def set_color(self, name: str, definition: DefinitionInput) -> Theme:
        """Set a single color definition. Returns self."""
        self._defs.update(coerce_color_map({name: definition}))
        return self

    def remove(self, names: str | Iterable[str]) -> Theme:
        """Remove one or more colors; missing names are ignored. Returns self."""
        for name in [names] if isinstance(names, str) else names:
            self._defs.pop(name, None)
        return self

    def has(self, name: str) -> bool:
        return name in self._defs

    def list(self) -> list[str]:
        """Defined color names in insertion order."""
        return list(self._defs)

    def reset(self) -> Theme:
        """Clear all color definitions. Returns self."""
        self._defs = {}
        return self

    def export(self) -> dict[str, Any]:
        """JSON-safe snapshot of the seed and definitions (no resolved values)."""
        return ThemeExport(
            hue=self._hue, saturation=self._saturation, colors=dict(self._defs)
        ).model_dump(mode="json")

    @classmethod
    def from_export(cls, data: Mapping[str, Any] | ThemeExport, **kwargs: Any) -> Theme:
        """Create a theme from :meth:`export` output."""
        exported = data if isinstance(data, ThemeExport) else ThemeExport.model_validate(data)
        return cls(exported.hue, exported.saturation, exported.colors, **kwargs)

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float, **kwargs: Any) -> Theme:
        """Create a theme seeded from the hue and saturation of an RGB (0-255) color."""
        h, s, _ = srgb_to_okhsl((r / 255.0, g / 255.0, b / 255.0))
        return cls(h, s * 100.0, **kwargs)

    @classmethod
    def from_hex(cls, value: str, **kwargs: Any) -> Theme:
        """Create a theme seeded from a ``#rgb`` or ``#rrggbb`` color.

        Raises:
            InvalidHexColorError: If the string is not a hex color.
        """
        rgb = parse_hex(value)
        if rgb is None:
            raise InvalidHexColorError(value)
        h, s, _ = srgb_to_okhsl(rgb)
        return cls(h, s * 100.0, **kwargs)

    def extend(
        self,
        *,
        hue: float | None = None,
        saturation: float | None = None,
        colors: Mapping[str, DefinitionInput] | None = None,
    ) -> Theme:
        """Create a child theme inheriting all definitions, optionally overriding some."""
        merged: dict[str, DefinitionInput] = dict(self._defs)
        if colors:
            merged.update(colors)
        return Theme(
            self._hue if hue is None else hue,
            self._saturation if saturation is None else saturation,
            merged,
            config=self.config,
            cache=self.cache,
        )

    # -- resolution and export -------------------------------------------------

    def resolve(self, config: GlazeConfig | None = None) -> dict[str, ResolvedColor]:
        """Resolve all colors across the four scheme variants."""
        return resolve_colors(
            self._hue, self._saturation, self._defs, config or self.config, cache=self.cache
        )

    def tokens(
        self,
        *,
        fmt: ColorFormat | str = ColorFormat.OKHSL,
        dark: bool | None = None,
        high_contrast: bool | None = None,
    ) -> dict[str, dict[str, str]]:
        """Flat token map grouped by scheme variant."""
        return build_flat_tokens(
            self.resolve(), _modes(self.config, dark, high_contrast), fmt=fmt
        )

    def tasty(
        self,
        *,
        fmt: ColorFormat | str = ColorFormat.OKHSL,
        dark: bool | None = None,
        high_contrast: bool | None = None,
        states: Mapping[str, str] | StateAliases | None = None,
    ) -> dict[str, dict[str, str]]:
        """Style-to-state bindings keyed by ``#name``."""
        return build_tasty_tokens(
            self.resolve(),
            _states(self.config, states),
            _modes(self.config, dark, high_contrast),
            fmt=fmt,
        )

    def json(
        self,
        *,
        fmt: ColorFormat | str = ColorFormat.OKHSL,
        dark: bool | None = None,
        high_contrast: bool | None = None,
    ) -> dict[str, dict[str, str]]:
        """Per-color map of scheme variants."""
        return build_json(self.resolve(), _modes(self.config, dark, high_contrast), fmt=fmt)

    def css(
        self,
        *,
        fmt: ColorFormat | str = ColorFormat.RGB,
        suffix: str = DEFAULT_CSS_SUFFIX,
    ) -> dict[str, str]:
        """CSS custom property declarations for all four variants."""
        return build_css(self.resolve(), suffix=suffix, fmt=fmt)


# =============================================================================
# Palette
# =============================================================================


def resolve_prefix(prefix: PrefixOption, theme_name: str) -> str:
    """Token prefix for a theme: ``True`` -> ``"<name>-"``, mapping -> lookup."""
    if prefix is True:
        return f"{theme_name}-"
    if isinstance(prefix, Mapping):
        return prefix.get(theme_name, f"{theme_name}-")
    return ""


class Palette:
    """A named collection of themes exported together."""

    def __init__(self, themes: Mapping[str, Theme], *, config: GlazeConfig | None = None):
        self.themes = dict(themes)
        self.config = config or DEFAULT_CONFIG

    def tokens(
        self,
        *,
        prefix: PrefixOption = None,
        fmt: ColorFormat | str = ColorFormat.OKHSL,
        dark: bool | None = None,
        high_contrast: bool | None = None,
    ) -> dict[str, dict[str, str]]:
        """Flat tokens of every theme merged per scheme variant."""
        modes = _modes(self.config, dark, high_contrast)
        merged: dict[str, dict[str, str]] = {}
        for theme_name, theme in self.themes.items():
            tokens = build_flat_tokens(
                theme.resolve(self.config),
                modes,
                prefix=resolve_prefix(prefix, theme_name),
                fmt=fmt,
            )
            for variant, values in tokens.items():
                merged.setdefault(variant, {}).update(values)
        return merged

    def tasty(
        self,
        *,
        prefix: PrefixOption = None,
        fmt: ColorFormat | str = ColorFormat.OKHSL,
        dark: bool | None = None,
        high_contrast: bool | None = None,
        states: Mapping[str, str] | StateAliases | None = None,
    ) -> dict[str, dict[str, str]]:
        """Tasty bindings of every theme merged into one map."""
        modes = _modes(self.config, dark, high_contrast)
        aliases = _states(self.config, states)
        merged: dict[str, dict[str, str]] = {}
        for theme_name, theme in self.themes.items():
            merged.update(
                build_tasty_tokens(
                    theme.resolve(self.config),
                    aliases,
                    modes,
                    prefix=resolve_prefix(prefix, theme_name),
                    fmt=fmt,
                )
            )
        return merged

    def json(
        self,
        *,
        fmt: ColorFormat | str = ColorFormat.OKHSL,
        dark: bool | None = None,
        high_contrast: bool | None = None,
    ) -> dict[str, dict[str, dict[str, str]]]:
        """JSON grouped by theme name."""
        modes = _modes(self.config, dark, high_contrast)
        return {
            theme_name: build_json(theme.resolve(self.config), modes, fmt=fmt)
            for theme_name, theme in self.themes.items()
        }

    def css(
        self,
        *,
        prefix: PrefixOption = None,
        fmt: ColorFormat | str = ColorFormat.RGB,
        suffix: str = DEFAULT_CSS_SUFFIX,
    ) -> dict[str, str]:
        """CSS blocks of every theme concatenated per scheme variant."""
        blocks: dict[str, list[str]] = {}
        for theme_name, theme in self.themes.items():
            css = build_css(
                theme.resolve(self.config),
                prefix=resolve_prefix(prefix, theme_name),
                suffix=suffix,
                fmt=fmt,
            )
            for variant, block in css.items():
                bucket = blocks.setdefault(variant, [])
                if block:
                    bucket.append(block)
        return {variant: "\n".join(parts) for variant, parts in blocks.items()}


# =============================================================================
# Standalone color token
# =============================================================================

_TOKEN_NAME = "__color__"


class ColorToken:
    """A single root color resolved outside of any theme."""

    def __init__(
        self,
        hue: float,
        saturation: float,
        lightness: float | tuple[float, float],
        *,
        saturation_factor: float | None = None,
        mode: AdaptationMode | str | None = None,
        config: GlazeConfig | None = None,
    ):
        definition: dict[str, Any] = {"lightness": lightness}
        if saturation_factor is not None:
            definition["saturation"] = saturation_factor
        if mode is not None:
            definition["mode"] = mode
        self._theme = Theme(hue, saturation, {_TOKEN_NAME: definition}, config=config)

    def resolve(self) -> ResolvedColor:
        return self._theme.resolve()[_TOKEN_NAME]

    def token(self, **kwargs: Any) -> dict[str, str]:
        """State binding map for this color (``""``, ``@dark``, ...)."""
        return self._theme.tasty(**kwargs)[f"#{_TOKEN_NAME}"]

    def tasty(self, **kwargs: Any) -> dict[str, str]:
        return self.token(**kwargs)

    def json(self, **kwargs: Any) -> dict[str, str]:
        """Variant map for this color (``light``, ``dark``, ...)."""
        return self._theme.json(**kwargs)[_TOKEN_NAME]


# =============================================================================
# Factories
# =============================================================================


def glaze(hue: float, saturation: float = 100.0, **kwargs: Any) -> Theme:
    """Create a single-hue theme from a hue (0-360) and saturation (0-100) seed."""
    return Theme(hue, saturation, **kwargs)


def from_rgb(r: float, g: float, b: float, **kwargs: Any) -> Theme:
    """Create a theme seeded from an RGB (0-255) color."""
    return Theme.from_rgb(r, g, b, **kwargs)


def from_hex(value: str, **kwargs: Any) -> Theme:
    """Create a theme seeded from a hex color."""
    return Theme.from_hex(value, **kwargs)


def palette(themes: Mapping[str, Theme], **kwargs: Any) -> Palette:
    """Compose themes into a palette."""
    return Palette(themes, **kwargs)


def color_token(
    hue: float,
    saturation: float,
    lightness: float | tuple[float, float],
    **kwargs: Any,
) -> ColorToken:
    """Create a standalone color token."""
    return ColorToken(hue, saturation, lightness, **kwargs)
