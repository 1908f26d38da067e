"""
OKHSL contrast solver.

Finds the OKHSL lightness closest to a preferred value that satisfies a WCAG 2
contrast target against a fixed base color. Used by the resolver for dependent
colors that declare ``contrast``, and exposed for direct use.

The search runs independently on the darker branch [min, preferred] and the
lighter branch [preferred, max], since contrast is not monotonic in lightness
around the base luminance. Each branch bisects towards the preferred value and
falls back to a coarse scan when bisection ends on two failing bounds, which
happens near gamut edges where the contrast curve bends.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from .errors import UnknownContrastPresetError
from .ir.colors import CONTRAST_PRESET_VALUES, ContrastPreset, MinContrast
from .okhsl import RGB, contrast_ratio, okhsl_to_linear_srgb, relative_luminance

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 512
COARSE_SCAN_STEPS = 64

Branch = Literal["lighter", "darker", "preferred"]


# =============================================================================
# Presets
# =============================================================================


def resolve_min_contrast(value: MinContrast | str) -> float:
    """Resolve a contrast floor to a numeric WCAG ratio.

    Numbers are floored at 1 (the minimum possible ratio). Strings must name
    a preset: ``AA`` (4.5), ``AAA`` (7), ``AA-large`` (3), ``AAA-large`` (4.5).

    Raises:
        UnknownContrastPresetError: If a string is not a known preset.
    """
    if isinstance(value, str):
        try:
            return CONTRAST_PRESET_VALUES[ContrastPreset(value)]
        except ValueError:
            raise UnknownContrastPresetError(value) from None
    return max(1.0, float(value))


# =============================================================================
# Luminance cache
# =============================================================================


class LuminanceCache:
    """Bounded FIFO memo of relative luminance by OKHSL (hue, saturation, lightness).

    Lightness is rounded to 4 decimals before lookup and conversion. The
    cached value is a pure function of the key, so entries never need
    invalidation. Not safe for concurrent mutation: give each thread its own
    instance.
    """

    def __init__(self, max_size: int = DEFAULT_CACHE_SIZE):
        """
        Initialize the cache.

        Args:
            max_size: Maximum number of entries; 0 disables caching.
        """
        if max_size < 0:
            raise ValueError(f"max_size must be >= 0, got {max_size}")
        self.max_size = max_size
        self._entries: dict[tuple[float, float, float], float] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def luminance(self, hue: float, saturation: float, lightness: float) -> float:
        """Relative luminance of an OKHSL color, memoized."""
        rounded = round(lightness, 4)
        key = (hue, saturation, rounded)

        cached = self._entries.get(key)
        if cached is not None:
            self.hits += 1
            return cached

        self.misses += 1
        y = relative_luminance(okhsl_to_linear_srgb(hue, saturation, rounded))

        if self.max_size == 0:
            return y
        if len(self._entries) >= self.max_size:
            # dicts keep insertion order, so the first key is the oldest
            del self._entries[next(iter(self._entries))]
        self._entries[key] = y
        return y

    def clear(self) -> None:
        """Drop all entries and reset statistics."""
        self._entries.clear()
        self.hits = 0
        self.misses = 0


_default_cache = LuminanceCache()


def get_default_cache() -> LuminanceCache:
    """Get the process-wide cache used when no cache is passed explicitly."""
    return _default_cache


# =============================================================================
# Solver
# =============================================================================


@dataclass
class ContrastResult:
    """Outcome of a contrast search."""

    lightness: float
    contrast: float
    met: bool
    branch: Branch


@dataclass
class _BranchResult:
    lightness: float
    contrast: float
    met: bool


def _search_branch(
    ratio_at: Callable[[float], float],
    lo: float,
    hi: float,
    target: float,
    preferred: float,
    epsilon: float,
    max_iterations: int,
) -> _BranchResult:
    """Bisect [lo, hi] for the passing lightness nearest ``preferred``."""
    cr_lo = ratio_at(lo)
    cr_hi = ratio_at(hi)

    if cr_lo < target and cr_hi < target:
        if cr_lo >= cr_hi:
            return _BranchResult(lo, cr_lo, False)
        return _BranchResult(hi, cr_hi, False)

    low, high = lo, hi
    for _ in range(max_iterations):
        if high - low < epsilon:
            break
        mid = (low + high) / 2.0
        passes = ratio_at(mid) >= target
        # Passing: move the bound on the far side of preferred in towards it.
        # Failing: move the bound on the near side out, away from preferred.
        if passes == (mid < preferred):
            low = mid
        else:
            high = mid

    cr_low = ratio_at(low)
    cr_high = ratio_at(high)
    low_passes = cr_low >= target
    high_passes = cr_high >= target

    if low_passes and high_passes:
        if abs(low - preferred) <= abs(high - preferred):
            return _BranchResult(low, cr_low, True)
        return _BranchResult(high, cr_high, True)
    if low_passes:
        return _BranchResult(low, cr_low, True)
    if high_passes:
        return _BranchResult(high, cr_high, True)

    logger.debug("Bisection unstable on [%.4f, %.4f], falling back to coarse scan", lo, hi)
    return _coarse_scan(ratio_at, lo, hi, target, epsilon, max_iterations)


def _coarse_scan(
    ratio_at: Callable[[float], float],
    lo: float,
    hi: float,
    target: float,
    epsilon: float,
    max_iterations: int,
) -> _BranchResult:
    """Sample [lo, hi] in equal steps; refine the first passing sample if any."""
    step = (hi - lo) / COARSE_SCAN_STEPS
    best_l = lo
    best_cr = 0.0
    best_index = 0
    met = False

    for i in range(COARSE_SCAN_STEPS + 1):
        lightness = lo + step * i
        cr = ratio_at(lightness)
        if cr >= target:
            best_l, best_cr, best_index, met = lightness, cr, i, True
            break
        if cr > best_cr:
            best_l, best_cr, best_index = lightness, cr, i

    if met and best_index > 1:
        r_lo = best_l - step
        r_hi = best_l
        for _ in range(max_iterations):
            if r_hi - r_lo < epsilon:
                break
            mid = (r_lo + r_hi) / 2.0
            cr = ratio_at(mid)
            if cr >= target:
                r_hi = mid
                best_l, best_cr = mid, cr
            else:
                r_lo = mid

    return _BranchResult(best_l, best_cr, met)


def find_lightness_for_contrast(
    *,
    hue: float,
    saturation: float,
    preferred_lightness: float,
    base_linear_rgb: RGB,
    contrast: MinContrast | str,
    lightness_range: tuple[float, float] = (0.0, 1.0),
    epsilon: float = 1e-4,
    max_iterations: int = 14,
    cache: LuminanceCache | None = None,
) -> ContrastResult:
    """Find the OKHSL lightness nearest ``preferred_lightness`` meeting a contrast floor.

    Args:
        hue: Candidate hue in degrees.
        saturation: Candidate OKHSL saturation (0-1).
        preferred_lightness: Preferred candidate lightness (0-1).
        base_linear_rgb: Base color as linear sRGB (channels clamped when measured).
        contrast: Target WCAG ratio or preset name.
        lightness_range: Search bounds for lightness.
        epsilon: Convergence width for bisection.
        max_iterations: Bisection rounds per branch.
        cache: Luminance cache; the process-wide default when omitted.

    Returns:
        ContrastResult. When the target is unreachable in range, ``met`` is
        False and ``lightness`` is the best achievable.
    """
    lum = cache if cache is not None else _default_cache
    target = resolve_min_contrast(contrast)
    y_base = relative_luminance(base_linear_rgb)

    def ratio_at(lightness: float) -> float:
        return contrast_ratio(lum.luminance(hue, saturation, lightness), y_base)

    cr_pref = ratio_at(preferred_lightness)
    if cr_pref >= target:
        return ContrastResult(preferred_lightness, cr_pref, True, "preferred")

    min_l, max_l = lightness_range

    darker = (
        _search_branch(
            ratio_at, min_l, preferred_lightness, target, preferred_lightness, epsilon, max_iterations
        )
        if preferred_lightness > min_l
        else None
    )
    lighter = (
        _search_branch(
            ratio_at, preferred_lightness, max_l, target, preferred_lightness, epsilon, max_iterations
        )
        if preferred_lightness < max_l
        else None
    )

    result = _choose_branch(darker, lighter, preferred_lightness, cr_pref)
    if not result.met:
        logger.debug(
            "Contrast target %.2f unreachable for hue=%.1f sat=%.3f; best %.2f at l=%.4f",
            target,
            hue,
            saturation,
            result.contrast,
            result.lightness,
        )
    return result


def _choose_branch(
    darker: _BranchResult | None,
    lighter: _BranchResult | None,
    preferred: float,
    cr_pref: float,
) -> ContrastResult:
    """Pick the passing branch nearest ``preferred``, else the higher contrast.

    Ties go to the darker branch.
    """
    candidates: list[ContrastResult] = []
    if darker is not None:
        candidates.append(_as_result(darker, "darker"))
    if lighter is not None:
        candidates.append(_as_result(lighter, "lighter"))

    if not candidates:
        return ContrastResult(preferred, cr_pref, False, "preferred")

    # min and max keep the first (darker) candidate on equal keys
    passing = [c for c in candidates if c.met]
    if passing:
        return min(passing, key=lambda c: abs(c.lightness - preferred))
    return max(candidates, key=lambda c: c.contrast)


def _as_result(result: _BranchResult, branch: Branch) -> ContrastResult:
    return ContrastResult(result.lightness, result.contrast, result.met, branch)
