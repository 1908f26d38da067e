"""Core Glaze functionality: IR, OKHSL math, contrast solver, resolver, exporters, theme files."""

from . import ir
from .contrast import ContrastResult, LuminanceCache, find_lightness_for_contrast, resolve_min_contrast
from .errors import (
    AmbiguousDefinitionWarning,
    CircularBaseError,
    ColorDefinitionError,
    GlazeError,
    InvalidHexColorError,
    MissingBaseForContrastError,
    MissingBaseForRelativeLightnessError,
    MissingPositionError,
    ResolutionError,
    ThemeFileError,
    UnknownBaseError,
    UnknownContrastPresetError,
)
from .resolver import ColorResolver, resolve_colors, topological_order, validate_color_map
from .theme_loader import load_theme_file

__all__ = [
    "ir",
    # Solver
    "ContrastResult",
    "LuminanceCache",
    "find_lightness_for_contrast",
    "resolve_min_contrast",
    # Resolver
    "ColorResolver",
    "resolve_colors",
    "topological_order",
    "validate_color_map",
    # Theme files
    "load_theme_file",
    # Errors
    "GlazeError",
    "ColorDefinitionError",
    "MissingPositionError",
    "MissingBaseForContrastError",
    "MissingBaseForRelativeLightnessError",
    "UnknownBaseError",
    "CircularBaseError",
    "ResolutionError",
    "UnknownContrastPresetError",
    "InvalidHexColorError",
    "ThemeFileError",
    "AmbiguousDefinitionWarning",
]
