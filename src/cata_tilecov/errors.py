"""
Error types for Cata-Tilecov.

Every error raised by the package derives from `TilecovError`. Errors that
describe a missing filesystem artifact also derive from `FileNotFoundError`,
so callers may catch either family.
"""

from pathlib import Path
from typing import Optional


class TilecovError(Exception):
    """Base class for all Cata-Tilecov errors."""
    pass


# =============================================================================
# Decoding errors
# =============================================================================

class MalformedJsonError(TilecovError, ValueError):
    """Raised when JSON content is syntactically invalid or has the wrong shape.

    `source` names the file (or ``<string>`` for in-memory content) and
    `location` points at the offending content: ``line:column`` for syntax
    errors, ``Shape.field`` for structural ones.
    """

    def __init__(self, message: str, source: str = "<string>", location: str = ""):
        self.source = source
        self.location = location
        where = f"{source}:{location}" if location else source
        super().__init__(f"{message} ({where})")


class ResourceNotFoundError(TilecovError, FileNotFoundError):
    """Raised when the Record Store Builder cannot open a resource path."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Unable to open resource from path: {path}")


class BuilderMisconfiguredError(TilecovError, RuntimeError):
    """Raised when a decoder is executed before it was fully configured.

    This is a programming error, not a data error.
    """
    pass


class SchemaDeclarationError(TilecovError, TypeError):
    """Raised when a record shape declares its fields inconsistently."""
    pass


class NullJsonObjectError(TilecovError):
    """Raised when decoding succeeded but produced no usable value."""

    def __init__(self, shape: type, json_property: Optional[str] = None):
        self.shape = shape
        self.json_property = json_property
        if json_property is None:
            message = f"JSON object of class '{shape.__qualname__}' is null"
        else:
            message = (
                f"Unable to find expected JSON property '{json_property}' "
                f"when deserializing to class {shape.__qualname__}"
            )
        super().__init__(message)


class MissingNestedValueError(NullJsonObjectError):
    """Raised when a declared nested field is present but decodes to nothing."""
    pass


# =============================================================================
# Tileset errors
# =============================================================================

class DirectoryNotFoundError(TilecovError, FileNotFoundError):
    """Raised when a tileset directory does not exist."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Tileset directory does not exist: {path}")


class MetadataNotFoundError(TilecovError, FileNotFoundError):
    """Raised when ``tileset.txt`` is missing from a tileset directory."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"tileset.txt not found in directory: {path}")


class MalformedMetadataError(TilecovError, ValueError):
    """Raised when ``tileset.txt`` is not valid UTF-8 text."""

    def __init__(self, path: Path, reason: str = ""):
        self.path = path
        message = f"Unable to read tileset metadata file: {path}"
        super().__init__(f"{message} ({reason})" if reason else message)


class MissingConfigPathError(TilecovError):
    """Raised when ``tileset.txt`` does not name the tile-config file."""

    def __init__(self, tileset_name: str):
        self.tileset_name = tileset_name
        super().__init__(f"Path to config file was not specified for tileset: {tileset_name}")


class ConfigFileNotFoundError(TilecovError, FileNotFoundError):
    """Raised when the tile-config file named in ``tileset.txt`` is missing."""

    def __init__(self, tileset_name: str, path: Path):
        self.tileset_name = tileset_name
        self.path = path
        super().__init__(f"Unable to find config file for tileset {tileset_name}: {path}")


class NullConfigObjectError(NullJsonObjectError):
    """Raised when a tile-config file decodes to nothing."""
    pass


# =============================================================================
# Coverage errors
# =============================================================================

class CoverageResolutionError(TilecovError):
    """Raised when a ``looks_like`` chain does not terminate."""

    def __init__(self, chain: list[str]):
        self.chain = chain
        super().__init__(f"looks_like cycle detected: {' -> '.join(chain)}")
