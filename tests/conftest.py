"""Shared pytest fixtures for Glaze tests."""

from pathlib import Path

import pytest

from glaze.core.contrast import LuminanceCache


@pytest.fixture
def cache() -> LuminanceCache:
    """Return a fresh luminance cache so tests never share solver state."""
    return LuminanceCache()


@pytest.fixture
def basic_colors() -> dict:
    """Surface + text + border theme used across resolver and export tests."""
    return {
        "surface": {"lightness": 97, "saturation": 0.75},
        "text": {"base": "surface", "lightness": "-52", "contrast": "AAA"},
        "border": {"base": "surface", "lightness": ["-7", "-20"]},
    }


@pytest.fixture
def theme_file(tmp_path: Path) -> Path:
    """Write a small theme YAML file and return its path."""
    path = tmp_path / "theme.yaml"
    path.write_text(
        """
hue: 280
saturation: 80
colors:
  surface:
    lightness: 97
    saturation: 0.75
  text:
    base: surface
    lightness: "-52"
    contrast: AAA
"""
    )
    return path
