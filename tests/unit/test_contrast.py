"""Tests for the OKHSL contrast solver and its luminance cache."""

from __future__ import annotations

import pytest

WHITE = (1.0, 1.0, 1.0)
BLACK = (0.0, 0.0, 0.0)
MID_GRAY = (0.2, 0.2, 0.2)


def _solve(cache, **overrides):
    from glaze.core.contrast import find_lightness_for_contrast

    kwargs = {
        "hue": 0.0,
        "saturation": 0.0,
        "preferred_lightness": 0.5,
        "base_linear_rgb": WHITE,
        "contrast": "AA",
        "cache": cache,
    }
    kwargs.update(overrides)
    return find_lightness_for_contrast(**kwargs)


def _ratio_at(lightness, base):
    from glaze.core.okhsl import contrast_ratio, okhsl_to_linear_srgb, relative_luminance

    y = relative_luminance(okhsl_to_linear_srgb(0.0, 0.0, lightness))
    return contrast_ratio(y, relative_luminance(base))


def _ratio(result, base):
    return _ratio_at(result.lightness, base)


# =============================================================================
# Presets
# =============================================================================


class TestResolveMinContrast:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("AA", 4.5), ("AAA", 7.0), ("AA-large", 3.0), ("AAA-large", 4.5)],
    )
    def test_presets(self, value, expected):
        from glaze.core.contrast import resolve_min_contrast

        assert resolve_min_contrast(value) == expected

    def test_numbers_pass_through(self):
        from glaze.core.contrast import resolve_min_contrast

        assert resolve_min_contrast(5.2) == 5.2

    def test_numbers_floored_at_one(self):
        from glaze.core.contrast import resolve_min_contrast

        assert resolve_min_contrast(0.5) == 1.0
        assert resolve_min_contrast(-3) == 1.0

    def test_unknown_preset(self):
        from glaze.core.contrast import resolve_min_contrast
        from glaze.core.errors import UnknownContrastPresetError

        with pytest.raises(UnknownContrastPresetError, match="XL"):
            resolve_min_contrast("XL")


# =============================================================================
# Solver
# =============================================================================


class TestFindLightnessForContrast:
    def test_preferred_already_passes(self, cache):
        result = _solve(cache, preferred_lightness=0.0)
        assert result.branch == "preferred"
        assert result.met
        assert result.lightness == 0.0
        assert result.contrast == pytest.approx(21.0)

    def test_darker_branch_against_light_base(self, cache):
        result = _solve(cache, preferred_lightness=0.9)
        assert result.met
        assert result.branch == "darker"
        assert result.lightness < 0.9
        assert result.contrast >= 4.5
        assert _ratio(result, WHITE) >= 4.5 - 0.01

    def test_lighter_branch_against_dark_base(self, cache):
        result = _solve(cache, preferred_lightness=0.1, base_linear_rgb=BLACK)
        assert result.met
        assert result.branch == "lighter"
        assert result.lightness > 0.1
        assert _ratio(result, BLACK) >= 4.5 - 0.01

    def test_result_is_nearest_passing_lightness(self, cache):
        result = _solve(cache, preferred_lightness=0.9)
        # Bisection converges onto the pass/fail boundary
        assert result.contrast == pytest.approx(4.5, abs=0.05)

    def test_preferred_at_range_edge(self, cache):
        result = _solve(cache, preferred_lightness=0.0, base_linear_rgb=BLACK)
        assert result.met
        assert result.branch == "lighter"

    def test_unreachable_target_returns_best_effort(self, cache):
        result = _solve(cache, base_linear_rgb=MID_GRAY, contrast="AAA")
        assert not result.met
        # Black gives 5.0 against Y=0.2, white only 4.2
        assert result.branch == "darker"
        assert result.lightness == 0.0
        assert result.contrast == pytest.approx(5.0)

    def test_trivial_numeric_target(self, cache):
        result = _solve(cache, contrast=0.5, preferred_lightness=0.42)
        assert result.branch == "preferred"
        assert result.lightness == 0.42

    def test_cache_does_not_change_result(self):
        from glaze.core.contrast import LuminanceCache

        cached = _solve(LuminanceCache(), preferred_lightness=0.8, contrast=7)
        uncached = _solve(LuminanceCache(max_size=0), preferred_lightness=0.8, contrast=7)
        assert cached == uncached

    def test_uses_given_cache(self, cache):
        _solve(cache, preferred_lightness=0.9)
        assert len(cache) > 0
        assert cache.misses > 0

    def test_darker_result_within_epsilon_of_boundary(self, cache):
        result = _solve(cache, preferred_lightness=0.9, epsilon=1e-4)
        assert result.met
        assert result.branch == "darker"

        # Dense scan down from preferred for the first passing lightness
        boundary = next(
            i / 10000 for i in range(9000, -1, -1) if _ratio_at(i / 10000, WHITE) >= 4.5
        )
        assert abs(result.lightness - boundary) <= 2e-4

    def test_lighter_result_within_epsilon_of_boundary(self, cache):
        result = _solve(
            cache, preferred_lightness=0.1, base_linear_rgb=BLACK, contrast="AAA", epsilon=1e-4
        )
        assert result.met
        assert result.branch == "lighter"

        boundary = next(
            i / 10000 for i in range(1000, 10001) if _ratio_at(i / 10000, BLACK) >= 7.0
        )
        assert abs(result.lightness - boundary) <= 2e-4


# =============================================================================
# Branch search internals
# =============================================================================


def _window_ratio(*windows):
    """Synthetic contrast curve: 5.0 inside any (lo, hi) window, 1.0 elsewhere."""

    def ratio_at(lightness):
        return 5.0 if any(lo <= lightness <= hi for lo, hi in windows) else 1.0

    return ratio_at


class TestBranchSearch:
    def test_unstable_bisection_falls_back_to_earliest_scan_sample(self, caplog):
        import logging

        from glaze.core.contrast import _search_branch

        ratio_at = _window_ratio((-1.0, 0.0), (0.30, 0.32))
        with caplog.at_level(logging.DEBUG, logger="glaze.core.contrast"):
            result = _search_branch(ratio_at, 0.0, 1.0, 4.5, 0.5, 1e-4, 14)

        assert "coarse scan" in caplog.text
        assert result.met
        assert result.lightness == 0.0
        assert result.contrast == 5.0

    def test_scan_refines_against_lower_neighbour(self):
        from glaze.core.contrast import _coarse_scan

        # Samples are 1/64 apart: 0.296875 fails, 0.3125 is the first pass
        ratio_at = _window_ratio((0.30, 0.32), (0.8, 1.0))
        result = _coarse_scan(ratio_at, 0.0, 1.0, 4.5, 1e-4, 14)

        assert result.met
        assert 0.30 <= result.lightness <= 0.30 + 1e-4
        assert result.contrast == 5.0

    def test_first_sample_pass_is_not_refined(self):
        from glaze.core.contrast import _coarse_scan

        ratio_at = _window_ratio((0.0, 0.01), (0.5, 0.6))
        result = _coarse_scan(ratio_at, 0.0, 1.0, 4.5, 1e-4, 14)
        assert result.met
        assert result.lightness == 0.0

    def test_scan_without_pass_keeps_highest_contrast_sample(self):
        from glaze.core.contrast import _coarse_scan

        result = _coarse_scan(lambda lightness: 1.0 + lightness, 0.0, 1.0, 4.5, 1e-4, 14)
        assert not result.met
        assert result.lightness == pytest.approx(1.0)
        assert result.contrast == pytest.approx(2.0)

    def test_both_endpoints_failing_skips_bisection(self):
        from glaze.core.contrast import _search_branch

        result = _search_branch(lambda lightness: 2.0 - lightness, 0.0, 0.5, 4.5, 0.5, 1e-4, 14)
        assert not result.met
        assert result.lightness == 0.0


class TestChooseBranch:
    def test_tie_goes_to_darker(self):
        from glaze.core.contrast import _BranchResult, _choose_branch

        darker = _BranchResult(0.25, 4.6, True)
        lighter = _BranchResult(0.75, 4.8, True)
        result = _choose_branch(darker, lighter, 0.5, 1.0)
        assert result.branch == "darker"
        assert result.lightness == 0.25

    def test_nearer_passing_branch_wins(self):
        from glaze.core.contrast import _BranchResult, _choose_branch

        darker = _BranchResult(0.2, 9.0, True)
        lighter = _BranchResult(0.6, 4.5, True)
        assert _choose_branch(darker, lighter, 0.5, 1.0).branch == "lighter"

    def test_single_passing_branch_beats_higher_contrast(self):
        from glaze.core.contrast import _BranchResult, _choose_branch

        darker = _BranchResult(0.0, 4.0, False)
        lighter = _BranchResult(0.9, 4.5, True)
        assert _choose_branch(darker, lighter, 0.5, 1.0).branch == "lighter"

    def test_no_branch_searched(self):
        from glaze.core.contrast import _choose_branch

        result = _choose_branch(None, None, 0.5, 1.2)
        assert result.branch == "preferred"
        assert not result.met
        assert result.contrast == 1.2


# =============================================================================
# Luminance cache
# =============================================================================


class TestLuminanceCache:
    def test_hit_after_miss(self, cache):
        first = cache.luminance(10.0, 0.5, 0.5)
        second = cache.luminance(10.0, 0.5, 0.5)
        assert first == second
        assert cache.misses == 1
        assert cache.hits == 1

    def test_lightness_rounded_to_four_decimals(self, cache):
        cache.luminance(0.0, 0.0, 0.5)
        cache.luminance(0.0, 0.0, 0.500001)
        assert len(cache) == 1
        assert cache.hits == 1

    def test_fifo_eviction(self):
        from glaze.core.contrast import LuminanceCache

        cache = LuminanceCache(max_size=2)
        cache.luminance(0.0, 0.0, 0.1)
        cache.luminance(0.0, 0.0, 0.2)
        cache.luminance(0.0, 0.0, 0.1)
        cache.luminance(0.0, 0.0, 0.3)
        assert len(cache) == 2
        # Oldest insertion is evicted even though it was just read
        assert (0.0, 0.0, 0.1) not in cache
        assert (0.0, 0.0, 0.3) in cache

    def test_disabled(self):
        from glaze.core.contrast import LuminanceCache

        cache = LuminanceCache(max_size=0)
        cache.luminance(0.0, 0.0, 0.5)
        cache.luminance(0.0, 0.0, 0.5)
        assert len(cache) == 0
        assert cache.hits == 0

    def test_negative_size_rejected(self):
        from glaze.core.contrast import LuminanceCache

        with pytest.raises(ValueError):
            LuminanceCache(max_size=-1)

    def test_clear(self, cache):
        cache.luminance(0.0, 0.0, 0.5)
        cache.clear()
        assert len(cache) == 0
        assert cache.misses == 0

    def test_matches_direct_computation(self, cache):
        from glaze.core.okhsl import okhsl_to_linear_srgb, relative_luminance

        assert cache.luminance(200.0, 0.4, 0.6) == relative_luminance(
            okhsl_to_linear_srgb(200.0, 0.4, 0.6)
        )

    def test_default_cache(self):
        from glaze.core.contrast import LuminanceCache, get_default_cache

        assert isinstance(get_default_cache(), LuminanceCache)
        assert get_default_cache() is get_default_cache()
