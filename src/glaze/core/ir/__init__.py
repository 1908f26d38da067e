"""
Glaze Intermediate Representation (IR) types.

All types are re-exported from this package.
"""

from .colors import (
    CONTRAST_PRESET_VALUES,
    DEFAULT_CONFIG,
    VARIANT_PASSES,
    Absolute,
    AdaptationMode,
    ColorDefinition,
    ColorFormat,
    ColorMap,
    ContrastPreset,
    GlazeConfig,
    MinContrast,
    OutputModes,
    Relative,
    ResolvedColor,
    ResolvedColorVariant,
    SchemeVariant,
    StateAliases,
    ThemeExport,
    pair_high_contrast,
    pair_normal,
    pick,
)

__all__ = [
    "CONTRAST_PRESET_VALUES",
    "DEFAULT_CONFIG",
    "VARIANT_PASSES",
    "Absolute",
    "AdaptationMode",
    "ColorDefinition",
    "ColorFormat",
    "ColorMap",
    "ContrastPreset",
    "GlazeConfig",
    "MinContrast",
    "OutputModes",
    "Relative",
    "ResolvedColor",
    "ResolvedColorVariant",
    "SchemeVariant",
    "StateAliases",
    "ThemeExport",
    "pair_high_contrast",
    "pair_normal",
    "pick",
]
