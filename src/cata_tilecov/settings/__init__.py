"""
Settings package for Cata-Tilecov.

Configuration lives in ``tilecov.ini`` and is read through Qt's QSettings
in INI format.

Usage:
    from cata_tilecov.settings import AppSettings

    settings = AppSettings()
    result = settings.validate()
"""

from .core import (
    CONFIG_FILE,
    GAME_DIR,
    LOG_COLORS,
    LOG_FILE,
    LOG_LEVEL,
    OUTPUT_DIR,
    AppSettings,
    write_default_config,
)
from .types import ConfigError, IllegalConfigPropertyError, MissingConfigPropertyError, ValidationResult
from .validation import SettingsValidator

__all__ = [
    "AppSettings",
    "SettingsValidator",
    "write_default_config",
    "ConfigError",
    "MissingConfigPropertyError",
    "IllegalConfigPropertyError",
    "ValidationResult",
    # Keys
    "CONFIG_FILE",
    "GAME_DIR",
    "OUTPUT_DIR",
    "LOG_LEVEL",
    "LOG_COLORS",
    "LOG_FILE",
]
