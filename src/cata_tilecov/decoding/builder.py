"""
Record Store Builder.

Fluent configure-then-execute facade over `RecordDecoder`:

    config = (
        RecordStoreBuilder.create()
        .of_type(TileConfig)
        .as_single()
        .with_decoder(TileConfigDecoder)
        .build(path)
    )

Execution returns None when the content legitimately holds no value (empty
content or JSON ``null``), never for errors.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import orjson

from ..errors import BuilderMisconfiguredError, MalformedJsonError, ResourceNotFoundError
from .decoder import RecordDecoder


class Arity(Enum):
    """Expected number of decoded values."""
    SINGLE = "single"
    LIST = "list"


class RecordStoreBuilder:
    """Assemble and run a decoder for one record shape."""

    def __init__(self):
        self.shape: Optional[type] = None
        self.arity: Optional[Arity] = None
        self.decoder_class: type[RecordDecoder[Any]] = RecordDecoder
        self.resource_root: Optional[Path] = None
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @classmethod
    def create(cls) -> "RecordStoreBuilder":
        """Return a new unconfigured builder."""
        return cls()

    def of_type(self, shape: type) -> "RecordStoreBuilder":
        """Set the record shape to decode into."""
        self.shape = shape
        return self

    def as_single(self) -> "RecordStoreBuilder":
        """Expect one JSON object."""
        self.arity = Arity.SINGLE
        return self

    def as_list(self) -> "RecordStoreBuilder":
        """Expect a JSON array of objects."""
        self.arity = Arity.LIST
        return self

    def with_decoder(self, decoder_class: type[RecordDecoder[Any]]) -> "RecordStoreBuilder":
        """Use a custom decoder variant for field-specific nested routing."""
        self.decoder_class = decoder_class
        return self

    def with_resource_root(self, root: str | Path) -> "RecordStoreBuilder":
        """Resolve relative paths passed to `build` against `root`."""
        self.resource_root = Path(root)
        return self

    def _decoder(self) -> RecordDecoder[Any]:
        if self.shape is None:
            raise BuilderMisconfiguredError("Record shape was not set, call of_type() first")
        if self.arity is None:
            raise BuilderMisconfiguredError("Result arity was not set, call as_single() or as_list() first")
        return self.decoder_class(self.shape)

    def _resolve(self, path: str | Path) -> Path:
        path = Path(path)
        if self.resource_root is not None and not path.is_absolute():
            return self.resource_root / path
        return path

    def build(self, path: str | Path) -> Any:
        """Decode the JSON file at `path`.

        Args:
            path: File path, relative paths are resolved against the
                  resource root when one was configured

        Returns:
            Decoded record, list of records, or None for empty content

        Raises:
            BuilderMisconfiguredError: if shape or arity was not set
            ResourceNotFoundError: if the file cannot be opened
            MalformedJsonError: if the content is not valid JSON or does not
                match the shape
        """
        decoder = self._decoder()
        resolved = self._resolve(path)

        try:
            with open(resolved, "rb") as f:
                content = f.read()
        except OSError as e:
            raise ResourceNotFoundError(resolved) from e

        self.logger.debug(f"Decoding {resolved} as {self.arity.value} {self.shape.__qualname__}")
        return self._run(decoder, content, str(resolved))

    def build_from_string(self, content: str | bytes, source: str = "<string>") -> Any:
        """Decode in-memory JSON content.

        Raises the same errors as `build`, except `ResourceNotFoundError`.
        """
        decoder = self._decoder()
        return self._run(decoder, content, source)

    def build_from_value(self, value: Any, source: str = "<string>") -> Any:
        """Decode an already parsed JSON value."""
        decoder = self._decoder()
        return self._apply(decoder, value, source)

    def _run(self, decoder: RecordDecoder[Any], content: str | bytes, source: str) -> Any:
        if not content.strip():
            return None
        try:
            value = orjson.loads(content)
        except orjson.JSONDecodeError as e:
            raise MalformedJsonError(e.msg, source, f"{e.lineno}:{e.colno}") from e
        return self._apply(decoder, value, source)

    def _apply(self, decoder: RecordDecoder[Any], value: Any, source: str) -> Any:
        if value is None:
            return None

        if self.arity is Arity.SINGLE:
            if isinstance(value, list):
                raise MalformedJsonError(
                    f"Expected a single {decoder.shape.__qualname__} object but found an array",
                    source,
                )
            return decoder.decode(value, source)

        # A lone object where a list is expected is treated as a list of one
        if isinstance(value, dict):
            value = [value]
        if not isinstance(value, list):
            raise MalformedJsonError(
                f"Expected an array of {decoder.shape.__qualname__} objects "
                f"but found {type(value).__name__}",
                source,
            )
        return decoder.decode_many(value, source)
