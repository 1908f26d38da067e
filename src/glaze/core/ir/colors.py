"""
Color definition IR types.

Defines the user-facing color definition model (what a theme author writes),
the resolved per-variant output, and the configuration that drives dark-scheme
adaptation and export.

Lightness and hue values are a tagged union of ``Absolute`` and ``Relative``.
Input coercion accepts plain numbers (absolute) and signed strings such as
``"+20"`` or ``"-15.5"`` (relative). A value may also be a
``(normal, high_contrast)`` pair.
"""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

# =============================================================================
# Enums
# =============================================================================


class AdaptationMode(StrEnum):
    """How a color's lightness and saturation change in the dark scheme."""

    AUTO = "auto"
    FIXED = "fixed"
    STATIC = "static"


class ContrastPreset(StrEnum):
    """Named WCAG contrast floors."""

    AA = "AA"
    AAA = "AAA"
    AA_LARGE = "AA-large"
    AAA_LARGE = "AAA-large"


# Mapping from preset to numeric ratio
CONTRAST_PRESET_VALUES: dict[str, float] = {
    ContrastPreset.AA: 4.5,
    ContrastPreset.AAA: 7.0,
    ContrastPreset.AA_LARGE: 3.0,
    ContrastPreset.AAA_LARGE: 4.5,
}


class SchemeVariant(StrEnum):
    """The four scheme variants every color resolves to."""

    LIGHT = "light"
    LIGHT_CONTRAST = "lightContrast"
    DARK = "dark"
    DARK_CONTRAST = "darkContrast"

    @property
    def is_dark(self) -> bool:
        return self in (SchemeVariant.DARK, SchemeVariant.DARK_CONTRAST)

    @property
    def is_high_contrast(self) -> bool:
        return self in (SchemeVariant.LIGHT_CONTRAST, SchemeVariant.DARK_CONTRAST)

    @classmethod
    def for_flags(cls, is_dark: bool, is_high_contrast: bool) -> SchemeVariant:
        if is_dark:
            return cls.DARK_CONTRAST if is_high_contrast else cls.DARK
        return cls.LIGHT_CONTRAST if is_high_contrast else cls.LIGHT


# Evaluation order: each pass may read bases from any earlier pass.
VARIANT_PASSES: tuple[SchemeVariant, ...] = (
    SchemeVariant.LIGHT,
    SchemeVariant.LIGHT_CONTRAST,
    SchemeVariant.DARK,
    SchemeVariant.DARK_CONTRAST,
)


# =============================================================================
# Absolute / relative values
# =============================================================================

_RELATIVE_RE = re.compile(r"^[+-]\d+(\.\d+)?$")


class Absolute(BaseModel):
    """An absolute value (lightness 0-100 or hue in degrees)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["absolute"] = "absolute"
    value: float


class Relative(BaseModel):
    """A signed offset from a base lightness or from the seed hue."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["relative"] = "relative"
    delta: float

    def __str__(self) -> str:
        return f"{self.delta:+g}"


ScalarValue = Annotated[Absolute | Relative, Field(discriminator="kind")]
MinContrast = float | ContrastPreset


def parse_scalar(value: Any) -> Any:
    """Coerce user input into the tagged-union form.

    Numbers become ``Absolute``; signed strings become ``Relative``. Anything
    else is returned untouched so pydantic reports it.
    """
    if isinstance(value, (Absolute, Relative)):
        return value.model_dump()
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return {"kind": "absolute", "value": value}
    if isinstance(value, str):
        text = value.strip()
        if _RELATIVE_RE.match(text):
            return {"kind": "relative", "delta": float(text)}
        raise ValueError(f"relative values must be signed (e.g. '+20', '-15.5'), got {value!r}")
    return value


def _scalar_kind(value: Any) -> str | None:
    return value.get("kind") if isinstance(value, dict) else None


def _serialize_scalar(value: Absolute | Relative) -> float | str:
    if isinstance(value, Relative):
        return str(value)
    return value.value


def pair_normal(value: Any) -> Any:
    """Pick the normal-contrast half of a value-or-pair."""
    return value[0] if isinstance(value, tuple) else value


def pair_high_contrast(value: Any) -> Any:
    """Pick the high-contrast half of a value-or-pair."""
    return value[1] if isinstance(value, tuple) else value


def pick(value: Any, is_high_contrast: bool) -> Any:
    return pair_high_contrast(value) if is_high_contrast else pair_normal(value)


# =============================================================================
# Color definition
# =============================================================================


class ColorDefinition(BaseModel):
    """A single named color in a theme.

    Root colors declare an absolute ``lightness``. Dependent colors declare a
    ``base`` and optionally a relative or absolute lightness and a contrast
    floor against the base.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    lightness: ScalarValue | tuple[ScalarValue, ScalarValue] | None = Field(
        default=None,
        description="Lightness 0-100 (absolute) or signed offset from base, optionally [normal, hc]",
    )
    saturation: float | None = Field(
        default=None,
        description="Saturation factor applied to the seed saturation (0-1, default 1)",
    )
    hue: ScalarValue | None = Field(
        default=None,
        description="Absolute hue or signed offset from the seed hue",
    )
    base: str | None = Field(default=None, description="Name of the base color")
    contrast: MinContrast | tuple[MinContrast, MinContrast] | None = Field(
        default=None,
        description="WCAG contrast floor against base, optionally [normal, hc]",
    )
    mode: AdaptationMode = Field(default=AdaptationMode.AUTO, description="Adaptation mode")

    @field_validator("lightness", mode="before")
    @classmethod
    def _coerce_lightness(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            if len(value) != 2:
                raise ValueError("lightness pair must have exactly two values [normal, hc]")
            normal, high_contrast = (parse_scalar(item) for item in value)
            if _scalar_kind(normal) != _scalar_kind(high_contrast):
                raise ValueError("lightness pair must be both absolute or both relative")
            return (normal, high_contrast)
        if value is None:
            return None
        return parse_scalar(value)

    @field_validator("hue", mode="before")
    @classmethod
    def _coerce_hue(cls, value: Any) -> Any:
        if value is None:
            return None
        return parse_scalar(value)

    @field_validator("contrast", mode="before")
    @classmethod
    def _coerce_contrast(cls, value: Any) -> Any:
        if isinstance(value, list):
            return tuple(value)
        return value

    @field_serializer("lightness")
    def _dump_lightness(self, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, tuple):
            return [_serialize_scalar(item) for item in value]
        return _serialize_scalar(value)

    @field_serializer("hue")
    def _dump_hue(self, value: Absolute | Relative | None) -> Any:
        if value is None:
            return None
        return _serialize_scalar(value)

    @field_serializer("contrast")
    def _dump_contrast(self, value: Any) -> Any:
        if isinstance(value, tuple):
            return [str(item) if isinstance(item, ContrastPreset) else item for item in value]
        if isinstance(value, ContrastPreset):
            return str(value)
        return value

    @property
    def has_absolute_lightness(self) -> bool:
        """True when the normal-contrast lightness is an absolute value."""
        if self.lightness is None:
            return False
        return isinstance(pair_normal(self.lightness), Absolute)

    @property
    def has_relative_lightness(self) -> bool:
        if self.lightness is None:
            return False
        return not self.has_absolute_lightness

    @property
    def is_root(self) -> bool:
        """Root colors have an absolute lightness and no base."""
        return self.has_absolute_lightness and self.base is None

    def to_input(self) -> dict[str, Any]:
        """Compact, JSON-safe form that validates back into an equal definition."""
        data = self.model_dump(mode="json", exclude_none=True)
        if data.get("mode") == AdaptationMode.AUTO:
            del data["mode"]
        return data


ColorMap = dict[str, ColorDefinition]


# =============================================================================
# Resolved output
# =============================================================================


class ResolvedColorVariant(BaseModel):
    """A color resolved for one scheme variant."""

    model_config = ConfigDict(frozen=True)

    h: float = Field(description="OKHSL hue (0-360)")
    s: float = Field(description="OKHSL saturation (0-1)")
    l: float = Field(description="OKHSL lightness (0-1)")  # noqa: E741


class ResolvedColor(BaseModel):
    """A color resolved across all four scheme variants."""

    model_config = ConfigDict(frozen=True)

    name: str
    light: ResolvedColorVariant
    light_contrast: ResolvedColorVariant
    dark: ResolvedColorVariant
    dark_contrast: ResolvedColorVariant
    mode: AdaptationMode

    def variant(self, variant: SchemeVariant) -> ResolvedColorVariant:
        """Get the resolved value for a scheme variant."""
        return {
            SchemeVariant.LIGHT: self.light,
            SchemeVariant.LIGHT_CONTRAST: self.light_contrast,
            SchemeVariant.DARK: self.dark,
            SchemeVariant.DARK_CONTRAST: self.dark_contrast,
        }[variant]


# =============================================================================
# Configuration
# =============================================================================


class ColorFormat(StrEnum):
    """Output color syntax."""

    OKHSL = "okhsl"
    RGB = "rgb"
    HSL = "hsl"
    OKLCH = "oklch"


class StateAliases(BaseModel):
    """State names used as keys in tasty exports."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    dark: str = Field(default="@dark", description="State alias for the dark scheme")
    high_contrast: str = Field(
        default="@high-contrast", description="State alias for high-contrast"
    )


class OutputModes(BaseModel):
    """Which scheme variants exports include. Light is always included."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    dark: bool = Field(default=True, description="Include dark scheme variants")
    high_contrast: bool = Field(default=False, description="Include high-contrast variants")


class GlazeConfig(BaseModel):
    """Resolution and export configuration.

    Passed explicitly into every resolve and export call so that resolution
    stays a pure function of its inputs.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    dark_lightness: tuple[float, float] = Field(
        default=(10.0, 90.0),
        description="Dark scheme lightness window [lo, hi] on the 0-100 scale",
    )
    dark_desaturation: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Saturation reduction factor applied in the dark scheme",
    )
    states: StateAliases = Field(default_factory=StateAliases)
    modes: OutputModes = Field(default_factory=OutputModes)

    def merged(self, **overrides: Any) -> GlazeConfig:
        """Return a copy with the given top-level fields replaced (validated)."""
        data = self.model_dump()
        for key, value in overrides.items():
            if value is None:
                continue
            if isinstance(value, BaseModel):
                value = value.model_dump()
            if isinstance(value, dict) and isinstance(data.get(key), dict):
                data[key] = {**data[key], **value}
            else:
                data[key] = value
        return GlazeConfig(**data)


DEFAULT_CONFIG = GlazeConfig()


# =============================================================================
# Theme export
# =============================================================================


class ThemeExport(BaseModel):
    """Serializable theme configuration (no resolved values)."""

    model_config = ConfigDict(frozen=True)

    hue: float = Field(ge=0.0, le=360.0, description="Seed hue (0-360)")
    saturation: float = Field(ge=0.0, le=100.0, description="Seed saturation (0-100)")
    colors: dict[str, ColorDefinition] = Field(default_factory=dict)

    @field_serializer("colors")
    def _dump_colors(self, colors: dict[str, ColorDefinition]) -> dict[str, Any]:
        return {name: definition.to_input() for name, definition in colors.items()}
