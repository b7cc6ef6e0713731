"""
Settings validation for Cata-Tilecov.
"""

import logging
from typing import List, TYPE_CHECKING

from .types import ConfigError, ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration without raising."""
        errors: List[str] = []
        warnings: List[str] = []

        # Game directory
        try:
            game_dir = self.settings.game_dir
        except ConfigError as e:
            errors.append(str(e))
        else:
            if not game_dir.exists():
                errors.append(f"Game directory does not exist: {game_dir}")
            elif not game_dir.is_dir():
                errors.append(f"Game directory is not a valid directory: {game_dir}")
            else:
                for required in ("data/json", "gfx"):
                    if not (game_dir / required).exists():
                        warnings.append(
                            f"Game directory might be invalid (no '{required}' directory): {game_dir}"
                        )

        # Output directory
        try:
            output_dir = self.settings.output_dir
        except ConfigError as e:
            errors.append(str(e))
        else:
            if output_dir.is_file():
                errors.append(f"Output directory needs to be a directory: {output_dir}")

        # Logging
        if self.settings.log_level not in VALID_LOG_LEVELS:
            warnings.append(f"Invalid log level: {self.settings.log_level}, INFO will be used")

        result = ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)
        logger.debug(f"Settings validation: {result}")
        return result
