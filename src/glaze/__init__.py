"""
Glaze - OKHSL color theme generator with automatic WCAG contrast solving.

Define colors relative to each other once; get light, dark and high-contrast
variants that keep their contrast guarantees.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.contrast import ContrastResult, find_lightness_for_contrast
from .core.errors import ColorDefinitionError, GlazeError, InvalidHexColorError, ThemeFileError
from .core.ir import ColorDefinition, ColorFormat, GlazeConfig, ResolvedColor
from .core.okhsl import contrast_ratio, okhsl_to_linear_srgb, relative_luminance
from .core.resolver import resolve_colors
from .core.theme_loader import load_theme_file
from .theme import (
    ColorToken,
    Palette,
    Theme,
    color_token,
    from_hex,
    from_rgb,
    glaze,
    palette,
)

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    # Theme API
    "glaze",
    "palette",
    "color_token",
    "from_hex",
    "from_rgb",
    "Theme",
    "Palette",
    "ColorToken",
    # Resolution
    "resolve_colors",
    "find_lightness_for_contrast",
    "ContrastResult",
    "ColorDefinition",
    "ColorFormat",
    "GlazeConfig",
    "ResolvedColor",
    "load_theme_file",
    # Math
    "okhsl_to_linear_srgb",
    "relative_luminance",
    "contrast_ratio",
    # Errors
    "GlazeError",
    "ColorDefinitionError",
    "InvalidHexColorError",
    "ThemeFileError",
]
