"""
Command-line host configuration.

Extends base configuration with where the CLI remembers credentials.
"""

from __future__ import annotations

import pathlib

import pydantic

from gistaviewer.config.base import BaseGistaSettings, lazy_settings


class CliSettings(BaseGistaSettings):
    """CLI-specific configuration."""

    CREDENTIALS_FILE: pathlib.Path = pydantic.Field(
        default_factory=lambda: pathlib.Path.home() / '.config' / 'gistaviewer' / 'credentials.json'
    )


# Module-level singleton (lazy-loaded)
settings = lazy_settings(CliSettings)
