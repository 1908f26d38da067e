"""Tests for the Theme, Palette and ColorToken API."""

from __future__ import annotations

import pytest
from pydantic import ValidationError


@pytest.fixture
def primary(basic_colors):
    from glaze import glaze

    return glaze(280, 80).colors(basic_colors)


# =============================================================================
# Theme definitions
# =============================================================================


class TestThemeDefinitions:
    def test_seed(self):
        from glaze import glaze

        theme = glaze(280)
        assert theme.hue == 280
        assert theme.saturation == 100

    def test_colors_is_additive(self):
        from glaze import glaze

        theme = glaze(0).colors({"a": {"lightness": 10}}).colors({"b": {"lightness": 20}})
        assert theme.list() == ["a", "b"]

    def test_colors_replaces_same_name(self):
        from glaze import glaze
        from glaze.core.ir import Absolute

        theme = glaze(0).colors({"a": {"lightness": 10}}).colors({"a": {"lightness": 30}})
        assert theme.color("a").lightness == Absolute(value=30)

    def test_set_color_remove_has(self):
        from glaze import glaze

        theme = glaze(0).set_color("a", {"lightness": 10}).set_color("b", {"lightness": 20})
        assert theme.has("a")
        theme.remove("a")
        assert not theme.has("a")
        theme.remove(["b", "missing"])
        assert theme.list() == []

    def test_color_missing(self):
        from glaze import glaze

        assert glaze(0).color("nope") is None

    def test_reset(self, primary):
        primary.reset()
        assert primary.list() == []
        assert primary.resolve() == {}

    def test_invalid_definition(self):
        from glaze import glaze

        with pytest.raises(ValidationError):
            glaze(0).colors({"a": {"lightness": "50"}})

    def test_accepts_models(self):
        from glaze import glaze
        from glaze.core.ir import ColorDefinition

        theme = glaze(0).colors({"a": ColorDefinition(lightness=10)})
        assert theme.resolve()["a"].light.l == pytest.approx(0.1)


# =============================================================================
# Export / extend
# =============================================================================


class TestThemeExport:
    def test_export_snapshot(self, primary):
        data = primary.export()
        assert data["hue"] == 280
        assert data["saturation"] == 80
        assert data["colors"]["surface"] == {"lightness": 97, "saturation": 0.75}
        assert data["colors"]["text"] == {"lightness": "-52", "base": "surface", "contrast": "AAA"}
        assert data["colors"]["border"] == {"lightness": ["-7", "-20"], "base": "surface"}

    def test_from_export_round_trip(self, primary):
        from glaze.theme import Theme

        restored = Theme.from_export(primary.export())
        assert restored.tokens() == primary.tokens()

    def test_extend_inherits(self, primary):
        child = primary.extend(hue=20, colors={"accent": {"lightness": 60}})
        assert child.hue == 20
        assert child.saturation == 80
        assert child.list() == ["surface", "text", "border", "accent"]
        assert not primary.has("accent")

    def test_extend_is_independent(self, primary):
        child = primary.extend()
        child.remove("border")
        assert primary.has("border")


# =============================================================================
# Seeds from colors
# =============================================================================


class TestColorSeeds:
    def test_from_hex(self):
        from glaze import from_hex

        theme = from_hex("#ff0000")
        assert theme.hue == pytest.approx(29.23, abs=0.5)
        assert theme.saturation == pytest.approx(100, abs=1)

    def test_from_rgb_matches_hex(self):
        from glaze import from_hex, from_rgb

        assert from_rgb(0x33, 0x66, 0x99).hue == pytest.approx(from_hex("#369").hue)

    def test_invalid_hex(self):
        from glaze import from_hex
        from glaze.core.errors import InvalidHexColorError

        with pytest.raises(InvalidHexColorError, match="invalid hex"):
            from_hex("not-a-color")


# =============================================================================
# Theme outputs
# =============================================================================


class TestThemeOutputs:
    def test_tokens(self, primary):
        tokens = primary.tokens()
        assert list(tokens) == ["light", "dark"]
        assert tokens["light"]["surface"] == "okhsl(280 60% 97%)"
        assert tokens["dark"]["surface"] == "okhsl(280 54% 12.4%)"

    def test_tokens_with_high_contrast(self, primary):
        tokens = primary.tokens(high_contrast=True)
        assert list(tokens) == ["light", "dark", "lightContrast", "darkContrast"]

    def test_tasty(self, primary):
        tasty = primary.tasty()
        assert list(tasty) == ["#surface", "#text", "#border"]
        assert len(tasty["#surface"]) == 2

    def test_tasty_state_override(self, primary):
        tasty = primary.tasty(states={"dark": "@night"})
        assert set(tasty["#surface"]) == {"", "@night"}

    def test_json(self, primary):
        data = primary.json(dark=False)
        assert data["surface"] == {"light": "okhsl(280 60% 97%)"}

    def test_css(self, primary):
        css = primary.css()
        assert css["light"].splitlines()[0].startswith("--surface-color: rgb(")

    def test_config_modes(self, basic_colors):
        from glaze import glaze
        from glaze.core.ir import DEFAULT_CONFIG

        config = DEFAULT_CONFIG.merged(modes={"high_contrast": True})
        theme = glaze(280, 80, config=config).colors(basic_colors)
        assert "lightContrast" in theme.tokens()
        assert "lightContrast" not in theme.tokens(high_contrast=False)

    def test_mutation_reflected(self, primary):
        before = primary.tokens()["light"]["surface"]
        primary.set_color("surface", {"lightness": 90, "saturation": 0.75})
        assert primary.tokens()["light"]["surface"] != before


# =============================================================================
# Palette
# =============================================================================


class TestPalette:
    @pytest.fixture
    def pal(self, primary):
        from glaze import glaze, palette

        danger = glaze(23, 70).colors({"surface": {"lightness": 95}})
        return palette({"primary": primary, "danger": danger})

    def test_tokens_without_prefix_merge(self, pal):
        tokens = pal.tokens()
        # danger defined last wins for the shared name
        assert tokens["light"]["surface"].startswith("okhsl(23 ")

    def test_tokens_prefix_true(self, pal):
        tokens = pal.tokens(prefix=True)
        assert "primary-surface" in tokens["light"]
        assert "danger-surface" in tokens["light"]

    def test_tokens_prefix_mapping(self, pal):
        tokens = pal.tokens(prefix={"primary": "p-"})
        assert "p-text" in tokens["light"]
        assert "danger-surface" in tokens["light"]

    def test_tasty(self, pal):
        tasty = pal.tasty(prefix=True)
        assert "#primary-text" in tasty
        assert "#danger-surface" in tasty

    def test_json_grouped_by_theme(self, pal):
        data = pal.json()
        assert list(data) == ["primary", "danger"]
        assert list(data["danger"]) == ["surface"]

    def test_css(self, pal):
        css = pal.css(prefix=True)
        assert "--primary-surface-color" in css["dark"]
        assert "--danger-surface-color" in css["dark"]

    def test_resolve_prefix(self):
        from glaze.theme import resolve_prefix

        assert resolve_prefix(None, "x") == ""
        assert resolve_prefix(False, "x") == ""
        assert resolve_prefix(True, "x") == "x-"
        assert resolve_prefix({"x": "y_"}, "x") == "y_"
        assert resolve_prefix({}, "x") == "x-"


# =============================================================================
# Standalone color token
# =============================================================================


class TestColorToken:
    def test_resolve(self):
        from glaze import color_token

        token = color_token(280, 80, 52)
        assert token.resolve().light.l == pytest.approx(0.52)

    def test_token_states(self):
        from glaze import color_token

        assert list(color_token(280, 80, 52).token()) == ["", "@dark"]

    def test_json(self):
        from glaze import color_token

        assert list(color_token(280, 80, 52).json()) == ["light", "dark"]

    def test_fixed_mode(self):
        from glaze import color_token

        token = color_token(280, 80, 52, mode="fixed")
        assert token.resolve().dark.l == pytest.approx(0.516)

    def test_saturation_factor_and_pair(self):
        from glaze import color_token

        token = color_token(280, 80, (52, 40), saturation_factor=0.5)
        resolved = token.resolve()
        assert resolved.light.s == pytest.approx(0.4)
        assert resolved.light_contrast.l == pytest.approx(0.4)
        assert "lightContrast" in token.json(high_contrast=True)
