"""
Color resolution engine.

Resolves a map of color definitions into light, light high-contrast, dark and
dark high-contrast variants:

1. Validate the map (roles, base references, cycles).
2. Order colors so every dependent color follows its base.
3. Evaluate the four variants strictly in sequence, recording each result in
   a table keyed by (color name, variant). Dependent colors read their base's
   value for the same variant from that table.

Resolution is a pure function of the seed, the definitions and the
configuration; the luminance cache only affects speed.
"""

from __future__ import annotations

import inspect
import logging
import os
import warnings
from collections.abc import Mapping
from typing import Any

from .contrast import LuminanceCache, find_lightness_for_contrast
from .errors import (
    AmbiguousDefinitionWarning,
    CircularBaseError,
    MissingBaseForContrastError,
    MissingBaseForRelativeLightnessError,
    MissingPositionError,
    ResolutionError,
    UnknownBaseError,
)
from .ir.colors import (
    DEFAULT_CONFIG,
    VARIANT_PASSES,
    Absolute,
    AdaptationMode,
    ColorDefinition,
    ColorMap,
    GlazeConfig,
    Relative,
    ResolvedColor,
    ResolvedColorVariant,
    SchemeVariant,
    pick,
)
from .okhsl import okhsl_to_linear_srgb

logger = logging.getLogger(__name__)


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


# =============================================================================
# Dark scheme mapping
# =============================================================================


def map_lightness_dark(lightness: float, mode: AdaptationMode, config: GlazeConfig) -> float:
    """Map a light-scheme lightness (0-100) into the dark window.

    ``static`` keeps the value, ``fixed`` compresses it into [lo, hi], and
    ``auto`` inverts it before compressing.
    """
    if mode == AdaptationMode.STATIC:
        return lightness
    lo, hi = config.dark_lightness
    if mode == AdaptationMode.FIXED:
        return lightness * (hi - lo) / 100.0 + lo
    return (100.0 - lightness) * (hi - lo) / 100.0 + lo


def map_saturation_dark(saturation: float, mode: AdaptationMode, config: GlazeConfig) -> float:
    """Desaturate a 0-1 saturation for the dark scheme unless the color is static."""
    if mode == AdaptationMode.STATIC:
        return saturation
    return saturation * (1.0 - config.dark_desaturation)


def normalize_hue(hue: float) -> float:
    """Fold a hue in degrees into [0, 360)."""
    hue = hue % 360.0
    # Tiny negative inputs round up to exactly 360.0.
    return 0.0 if hue == 360.0 else hue


def resolve_effective_hue(seed_hue: float, hue: Absolute | Relative | None) -> float:
    """Hue for a color: absolute override, seed-relative override, or the seed."""
    if hue is None:
        return seed_hue
    if isinstance(hue, Relative):
        return normalize_hue(seed_hue + hue.delta)
    return normalize_hue(hue.value)


# =============================================================================
# Validation and ordering
# =============================================================================


def coerce_color_map(colors: Mapping[str, ColorDefinition | Mapping[str, Any]]) -> ColorMap:
    """Validate plain dict definitions into ColorDefinition models, keeping order."""
    return {
        name: (
            definition
            if isinstance(definition, ColorDefinition)
            else ColorDefinition.model_validate(definition)
        )
        for name, definition in colors.items()
    }


def _external_stacklevel() -> int:
    """Warning stack level that points at the first caller outside this package."""
    package_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__))) + os.sep
    level = 0
    frame = inspect.currentframe()
    while frame is not None and frame.f_code.co_filename.startswith(package_dir):
        frame = frame.f_back
        level += 1
    return level


def _base_edge(colors: ColorMap, name: str) -> str | None:
    """The base edge followed by cycle detection, or None for absolute lightness."""
    definition = colors[name]
    if definition.base is not None and not definition.has_absolute_lightness:
        return definition.base
    return None


def _ordering_edges(colors: ColorMap) -> dict[str, str | None]:
    """The base each color must be evaluated after.

    An absolute-lightness color with a base only reads that base when it
    declares a contrast floor, so only then is it ordered after the base. If
    that edge would close a loop it is dropped, and evaluation raises
    :class:`ResolutionError` on the missing base value.
    """
    edges: dict[str, str | None] = {}
    for name, definition in colors.items():
        if definition.has_absolute_lightness and definition.contrast is None:
            edges[name] = None
        else:
            edges[name] = definition.base

    visited: set[str] = set()
    for start in colors:
        path: list[str] = []
        node: str | None = start
        while node is not None and node not in visited:
            if node in path:
                # Validation rejects loops of plain base edges.
                loop = path[path.index(node) :]
                breaker = next(n for n in loop if colors[n].has_absolute_lightness)
                logger.warning(
                    "Color %s cannot be ordered after its base %s", breaker, colors[breaker].base
                )
                edges[breaker] = None
                break
            path.append(node)
            node = edges[node]
        visited.update(path)
    return edges


def validate_color_map(colors: ColorMap) -> None:
    """Check every definition's role and base references, then look for cycles.

    Raises:
        MissingBaseForContrastError: Contrast floor without base.
        MissingBaseForRelativeLightnessError: Relative lightness without base.
        UnknownBaseError: Base names a color that does not exist.
        MissingPositionError: Neither absolute lightness nor base.
        CircularBaseError: The base graph has a cycle.
    """
    for name, definition in colors.items():
        if definition.contrast is not None and definition.base is None:
            raise MissingBaseForContrastError(name)

        if definition.has_relative_lightness and definition.base is None:
            raise MissingBaseForRelativeLightnessError(name)

        if definition.has_absolute_lightness and definition.base is not None:
            logger.warning(
                "Color %s has absolute lightness and base; lightness is placed independently of base",
                name,
            )
            warnings.warn(AmbiguousDefinitionWarning(name), stacklevel=_external_stacklevel())

        if definition.base is not None and definition.base not in colors:
            raise UnknownBaseError(name, definition.base)

        if not definition.has_absolute_lightness and definition.base is None:
            raise MissingPositionError(name)

    # Each color has at most one outgoing edge, so every walk is a chain.
    visited: set[str] = set()
    for start in colors:
        on_path: set[str] = set()
        node: str | None = start
        while node is not None and node not in visited:
            if node in on_path:
                raise CircularBaseError(node)
            on_path.add(node)
            node = _base_edge(colors, node)
        visited.update(on_path)


def topological_order(colors: ColorMap) -> list[str]:
    """Depth-first post-order over base edges: bases always precede dependents.

    Assumes the map has passed :func:`validate_color_map`.
    """
    edges = _ordering_edges(colors)
    order: list[str] = []
    visited: set[str] = set()
    for start in colors:
        chain: list[str] = []
        node: str | None = start
        while node is not None and node not in visited:
            visited.add(node)
            chain.append(node)
            node = edges[node]
        order.extend(reversed(chain))
    return order


# =============================================================================
# Resolver
# =============================================================================


class ColorResolver:
    """Resolves one color map against one seed and configuration.

    A resolver instance holds the per-variant result table for a single
    resolve call; create a new one for each call.
    """

    def __init__(
        self,
        seed_hue: float,
        seed_saturation: float,
        colors: Mapping[str, ColorDefinition | Mapping[str, Any]],
        config: GlazeConfig | None = None,
        *,
        cache: LuminanceCache | None = None,
    ):
        self.seed_hue = seed_hue
        self.seed_saturation = seed_saturation
        self.colors = coerce_color_map(colors)
        self.config = config or DEFAULT_CONFIG
        self.cache = cache
        self._table: dict[tuple[str, SchemeVariant], ResolvedColorVariant] = {}

    def resolve(self) -> dict[str, ResolvedColor]:
        """Validate, order and evaluate every color across all four variants."""
        validate_color_map(self.colors)
        order = topological_order(self.colors)

        self._table = {}
        for variant in VARIANT_PASSES:
            for name in order:
                self._table[(name, variant)] = self.evaluate(name, variant)

        result = {
            name: ResolvedColor(
                name=name,
                light=self._table[(name, SchemeVariant.LIGHT)],
                light_contrast=self._table[(name, SchemeVariant.LIGHT_CONTRAST)],
                dark=self._table[(name, SchemeVariant.DARK)],
                dark_contrast=self._table[(name, SchemeVariant.DARK_CONTRAST)],
                mode=definition.mode,
            )
            for name, definition in self.colors.items()
        }
        logger.debug(
            "Resolved %d colors (seed hue=%.1f, saturation=%.1f)",
            len(result),
            self.seed_hue,
            self.seed_saturation,
        )
        return result

    def evaluate(self, name: str, variant: SchemeVariant) -> ResolvedColorVariant:
        """Resolve a single color for one scheme variant."""
        definition = self.colors[name]
        mode = definition.mode
        is_dark = variant.is_dark
        hue = resolve_effective_hue(self.seed_hue, definition.hue)
        sat_factor = clamp(1.0 if definition.saturation is None else definition.saturation, 0.0, 1.0)
        saturation = sat_factor * self.seed_saturation / 100.0

        if definition.is_root:
            lightness = self._root_lightness(definition, variant)
            if is_dark:
                lightness = map_lightness_dark(lightness, mode, self.config)
        else:
            lightness = self._dependent_lightness(name, definition, variant, hue, saturation)

        if is_dark:
            saturation = map_saturation_dark(saturation, mode, self.config)

        return ResolvedColorVariant(
            h=hue,
            s=clamp(saturation, 0.0, 1.0),
            l=clamp(lightness / 100.0, 0.0, 1.0),
        )

    def _root_lightness(self, definition: ColorDefinition, variant: SchemeVariant) -> float:
        value = pick(definition.lightness, variant.is_high_contrast)
        return clamp(value.value, 0.0, 100.0)

    def _base_value(self, name: str, base: str, variant: SchemeVariant) -> ResolvedColorVariant:
        try:
            return self._table[(base, variant)]
        except KeyError:
            raise ResolutionError(f'base "{base}" not yet resolved for {variant} variant', name) from None

    def _dependent_lightness(
        self,
        name: str,
        definition: ColorDefinition,
        variant: SchemeVariant,
        hue: float,
        saturation: float,
    ) -> float:
        """Lightness (0-100) of a dependent color, already specific to ``variant``."""
        assert definition.base is not None
        mode = definition.mode
        is_dark = variant.is_dark
        is_hc = variant.is_high_contrast

        value = None if definition.lightness is None else pick(definition.lightness, is_hc)

        if isinstance(value, Absolute):
            # Placed independently of the base; only the contrast floor reads it.
            if is_dark:
                preferred = map_lightness_dark(value.value, mode, self.config)
            else:
                preferred = clamp(value.value, 0.0, 100.0)
        else:
            base_l = self._base_value(name, definition.base, variant).l * 100.0
            if value is None:
                preferred = base_l
            else:
                delta = value.delta
                if is_dark and mode == AdaptationMode.AUTO:
                    delta = -delta
                preferred = clamp(base_l + delta, 0.0, 100.0)

        if definition.contrast is None:
            return clamp(preferred, 0.0, 100.0)

        base = self._base_value(name, definition.base, variant)
        floor = pick(definition.contrast, is_hc)
        solve_saturation = map_saturation_dark(saturation, mode, self.config) if is_dark else saturation
        result = find_lightness_for_contrast(
            hue=hue,
            saturation=solve_saturation,
            preferred_lightness=preferred / 100.0,
            base_linear_rgb=okhsl_to_linear_srgb(base.h, base.s, base.l),
            contrast=floor,
            cache=self.cache,
        )
        if not result.met:
            logger.debug(
                "Color %s (%s) misses contrast %s against %s; best %.2f",
                name,
                variant,
                floor,
                definition.base,
                result.contrast,
            )
        return result.lightness * 100.0


def resolve_colors(
    seed_hue: float,
    seed_saturation: float,
    colors: Mapping[str, ColorDefinition | Mapping[str, Any]],
    config: GlazeConfig | None = None,
    *,
    cache: LuminanceCache | None = None,
) -> dict[str, ResolvedColor]:
    """Resolve a color map into all four scheme variants.

    Args:
        seed_hue: Theme seed hue (0-360).
        seed_saturation: Theme seed saturation (0-100).
        colors: Color definitions by name (models or plain dicts).
        config: Dark-scheme configuration; defaults when omitted.
        cache: Luminance cache for the contrast solver.

    Returns:
        Resolved colors by name, in definition order.

    Raises:
        ColorDefinitionError: If the map fails validation. No partial result
            is produced.
    """
    return ColorResolver(seed_hue, seed_saturation, colors, config, cache=cache).resolve()
