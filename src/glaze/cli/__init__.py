"""
Glaze CLI Package.

- app.py: Typer app and commands
- common.py: Shared helpers (theme loading, JSON output, version)
"""

from glaze.cli.app import app, main
from glaze.cli.common import version_callback

__all__ = [
    "app",
    "main",
    "version_callback",
]
