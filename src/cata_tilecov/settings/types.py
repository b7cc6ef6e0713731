"""
Configuration type definitions and exceptions for Cata-Tilecov.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List

from ..errors import TilecovError


class ConfigError(TilecovError):
    """Raised when configuration is invalid or cannot be accessed."""
    pass


class MissingConfigPropertyError(ConfigError):
    """Raised when a required key is absent from the configuration file."""

    def __init__(self, key: str, path: Path):
        self.key = key
        self.path = path
        super().__init__(f"Missing required config property '{key}' in {path}")


class IllegalConfigPropertyError(ConfigError):
    """Raised when a configuration value is empty or invalid."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Illegal value for config property '{key}': {reason}")


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    is_valid: bool
    errors: List[str]
    warnings: List[str]
