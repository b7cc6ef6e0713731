"""
Core settings management for Cata-Tilecov.
"""

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QSettings

from .types import IllegalConfigPropertyError, MissingConfigPropertyError, ValidationResult
from .validation import SettingsValidator

logger = logging.getLogger(__name__)

CONFIG_FILE = "tilecov.ini"

# Config keys
GAME_DIR = "GAME_DIR"
OUTPUT_DIR = "OUTPUT_DIR"
LOG_LEVEL = "LOG_LEVEL"
LOG_COLORS = "LOG_COLORS"
LOG_FILE = "LOG_FILE"

# key -> (default value, comment lines)
DEFAULTS: dict[str, tuple[str, tuple[str, ...]]] = {
    GAME_DIR: (".", ("Path to the Cataclysm game directory",)),
    OUTPUT_DIR: ("reports", ("Directory where coverage reports are written",)),
    LOG_LEVEL: ("INFO", ("Console log level: DEBUG, INFO, WARNING, ERROR or CRITICAL",)),
    LOG_COLORS: ("true", ("Colorize log level names in the console",)),
    LOG_FILE: ("", ("Path of a CSV log file, leave empty to disable file logging",)),
}


def write_default_config(path: Path) -> None:
    """Write a configuration file holding the default values."""
    lines = ["; Cata-Tilecov configuration", "", "[General]"]
    for key, (default, comments) in DEFAULTS.items():
        lines.extend(f"; {comment}" for comment in comments)
        lines.append(f"{key}={default}")
        lines.append("")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines), encoding="utf-8")


class AppSettings:
    """
    Configuration stored in ``tilecov.ini``, read through QSettings.

    The file is created with default values when it does not exist.
    Values set with `override` take precedence over the file and are never
    written back.
    """

    def __init__(self, config_dir: Optional[str | Path] = None):
        """Initialize settings from the configuration directory.

        Args:
            config_dir: Directory holding ``tilecov.ini`` (default: current
                        working directory)
        """
        self.config_dir = Path(config_dir) if config_dir is not None else Path.cwd()
        self.config_path = self.config_dir / CONFIG_FILE

        if not self.config_path.exists():
            logger.info(f"Creating default configuration file: {self.config_path}")
            write_default_config(self.config_path)

        self.settings = QSettings(str(self.config_path), QSettings.Format.IniFormat)
        self._overrides: dict[str, str] = {}
        self._validator = SettingsValidator(self)

        logger.debug(f"Settings loaded from: {self.settings.fileName()}")

    # === HELPER METHODS ===

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        if key in self._overrides:
            return self._overrides[key]
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_bool(self, key: str, default: bool = False) -> bool:
        """Type-safe boolean retrieval from settings."""
        value = self._overrides.get(key, self.settings.value(key, default))
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    def _get_required(self, key: str) -> str:
        """Return a required value.

        Raises:
            MissingConfigPropertyError: if the key is absent
            IllegalConfigPropertyError: if the value is empty
        """
        if key not in self._overrides and not self.settings.contains(key):
            raise MissingConfigPropertyError(key, self.config_path)
        value = self._get_str(key).strip()
        if not value:
            raise IllegalConfigPropertyError(key, "value is empty")
        return value

    def override(self, key: str, value: str) -> None:
        """Override a configuration value for this session only."""
        logger.debug(f"Overriding config property {key}={value}")
        self._overrides[key] = value

    # === VALUES ===

    @property
    def game_dir(self) -> Path:
        """Cataclysm game directory."""
        return Path(self._get_required(GAME_DIR))

    @property
    def output_dir(self) -> Path:
        """Directory where reports are written."""
        return Path(self._get_required(OUTPUT_DIR))

    @property
    def log_level(self) -> str:
        """Console log level name."""
        return self._get_str(LOG_LEVEL, "INFO").strip().upper() or "INFO"

    @property
    def log_colors(self) -> bool:
        """Whether console log level names are colorized."""
        return self._get_bool(LOG_COLORS, True)

    @property
    def log_file(self) -> Optional[Path]:
        """CSV log file path, None when file logging is disabled."""
        value = self._get_str(LOG_FILE).strip()
        return Path(value) if value else None

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    def require_valid(self) -> None:
        """Check the directories the tool needs.

        Raises:
            MissingConfigPropertyError: if a directory is not configured
            IllegalConfigPropertyError: if the game directory is missing or
                not a directory, or the output directory is a regular file
        """
        game_dir = self.game_dir
        if not game_dir.exists():
            raise IllegalConfigPropertyError(GAME_DIR, f"game directory does not exist: {game_dir}")
        if not game_dir.is_dir():
            raise IllegalConfigPropertyError(GAME_DIR, f"game directory is not a valid directory: {game_dir}")

        output_dir = self.output_dir
        if output_dir.is_file():
            raise IllegalConfigPropertyError(OUTPUT_DIR, f"output directory needs to be a directory: {output_dir}")
