"""
Error types for Glaze color definition validation and resolution.
"""

from pathlib import Path


class GlazeError(Exception):
    """Base exception for all Glaze errors."""

    def __init__(self, message: str, color_name: str | None = None):
        self.message = message
        self.color_name = color_name
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with the offending color name if available."""
        if self.color_name is not None:
            return f'color "{self.color_name}": {self.message}'
        return self.message


class ColorDefinitionError(GlazeError):
    """
    Raised when a color map fails validation before resolution.

    Examples:
    - Color with neither lightness nor base
    - Contrast floor without a base
    - Base pointing at an unknown color
    - Circular base references
    """

    pass


class MissingPositionError(ColorDefinitionError):
    """Color has neither an absolute lightness (root) nor a base (dependent)."""

    def __init__(self, color_name: str):
        super().__init__(
            'must have either absolute "lightness" (root) or "base" (dependent)',
            color_name,
        )


class MissingBaseForContrastError(ColorDefinitionError):
    """Color declares a contrast floor without a base to measure it against."""

    def __init__(self, color_name: str):
        super().__init__('has "contrast" without "base"', color_name)


class MissingBaseForRelativeLightnessError(ColorDefinitionError):
    """Color declares a relative lightness without a base to offset from."""

    def __init__(self, color_name: str):
        super().__init__('has relative "lightness" without "base"', color_name)


class UnknownBaseError(ColorDefinitionError):
    """Color references a base that is not defined in the same map."""

    def __init__(self, color_name: str, base: str):
        self.base = base
        super().__init__(f'references non-existent base "{base}"', color_name)


class CircularBaseError(ColorDefinitionError):
    """The base graph contains a cycle."""

    def __init__(self, color_name: str):
        super().__init__("circular base reference detected", color_name)


class ResolutionError(GlazeError):
    """
    Raised when resolution reaches a state ordering should make impossible.

    Examples:
    - A dependent color evaluated before its base
    """

    pass


class UnknownContrastPresetError(GlazeError):
    """Contrast floor names a preset that does not exist."""

    def __init__(self, preset: str):
        self.preset = preset
        super().__init__(f'unknown contrast preset "{preset}"')


class InvalidHexColorError(GlazeError):
    """Seed color string could not be parsed as hex."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f'invalid hex color "{value}"')


class ThemeFileError(GlazeError):
    """Error loading or validating a theme definition file."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class AmbiguousDefinitionWarning(UserWarning):
    """
    Color declares both an absolute lightness and a base.

    Absolute lightness takes precedence and is placed independently of the
    base. A contrast floor is still enforced against the base.
    """

    def __init__(self, color_name: str):
        self.color_name = color_name
        super().__init__(
            f'color "{color_name}" has absolute "lightness" and "base"; '
            "absolute lightness takes precedence"
        )
