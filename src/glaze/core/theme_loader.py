"""
Theme file loader.

Reads a theme definition from YAML:

    hue: 280
    saturation: 80
    colors:
      surface: {lightness: 97, saturation: 0.75}
      text: {base: surface, lightness: "-52", contrast: AAA}
    config:
      dark_lightness: [15, 95]
      modes: {high_contrast: true}

``config`` is optional; omitted fields keep their defaults and unknown
fields are rejected.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import ValidationError

from .errors import ThemeFileError
from .ir.colors import GlazeConfig, ThemeExport

if TYPE_CHECKING:
    from ..theme import Theme

logger = logging.getLogger(__name__)

_TOP_LEVEL_KEYS = {"hue", "saturation", "colors", "config"}


def _parse_theme_data(data: dict[str, Any], path: Path) -> tuple[ThemeExport, GlazeConfig]:
    unknown = set(data) - _TOP_LEVEL_KEYS
    if unknown:
        raise ThemeFileError(f"unknown top-level keys: {', '.join(sorted(unknown))}", path)
    if "hue" not in data:
        raise ThemeFileError('missing required key "hue"', path)

    exported = ThemeExport.model_validate(
        {
            "hue": data["hue"],
            "saturation": data.get("saturation", 100),
            "colors": data.get("colors") or {},
        }
    )

    config_data = data.get("config") or {}
    if not isinstance(config_data, dict):
        raise ThemeFileError('"config" must be a mapping', path)
    config = GlazeConfig.model_validate(config_data)
    return exported, config


def load_theme_file(path: Path | str) -> tuple[Theme, GlazeConfig]:
    """Load a theme and its configuration from a YAML file.

    Args:
        path: Path to the theme YAML file.

    Returns:
        Tuple of (Theme, GlazeConfig). The theme carries the loaded config.

    Raises:
        ThemeFileError: If the file is missing, not valid YAML, or fails
            schema validation.
    """
    from ..theme import Theme

    path = Path(path)
    if not path.exists():
        raise ThemeFileError("theme file not found", path)

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ThemeFileError(f"invalid YAML: {e}", path) from e

    if not isinstance(data, dict):
        raise ThemeFileError("expected a mapping with hue, saturation and colors", path)

    try:
        exported, config = _parse_theme_data(data, path)
    except ValidationError as e:
        raise ThemeFileError(f"invalid theme schema: {e}", path) from e

    logger.debug("Loaded theme from %s with %d colors", path, len(exported.colors))
    return Theme.from_export(exported, config=config), config

