"""
Declarative record decoder.

Decodes JSON objects into record shapes described in `fields`. Plain
fields are decoded first, nested fields are then resolved into their value
types and list-like fields normalized last. Subclasses override
`resolve_nested` to route specific JSON keys to specific shapes.
"""

import logging
from typing import Any, Generic, Optional, TypeVar

from ..errors import MalformedJsonError, MissingNestedValueError
from .fields import FieldSpec, describe
from .values import is_scalar, normalize_list, scalar_to_str

T = TypeVar("T")


def coerce_plain(value: Any, target: Any, source: str, location: str) -> Any:
    """Decode a plain JSON value according to the field's declared type.

    Strings, integers, floats and booleans are checked and converted with
    the usual lenient JSON rules (numbers may be written as strings and
    vice versa); any other declared type receives the raw JSON value.

    Raises:
        MalformedJsonError: if the value cannot be converted.
    """
    if target is str:
        if is_scalar(value):
            return scalar_to_str(value)
    elif target is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("true", "false"):
            return value.lower() == "true"
    elif target is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value)
            except ValueError:
                pass
    elif target is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                pass
    else:
        return value

    raise MalformedJsonError(
        f"Cannot decode {type(value).__name__} value as {target.__name__}",
        source, location,
    )


class RecordDecoder(Generic[T]):
    """Decode JSON objects into instances of one record shape.

    The field table is built once per shape (see `describe`), so creating
    decoders is cheap and a decoder holds no per-call state.
    """

    def __init__(self, shape: type[T]):
        self.shape = shape
        self.table = describe(shape)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def location(self, spec: FieldSpec) -> str:
        """Return ``Shape.json_key`` for error messages."""
        return f"{self.shape.__qualname__}.{spec.json_key}"

    def decode(self, value: Any, source: str = "<string>") -> T:
        """Decode one JSON object.

        Args:
            value: Parsed JSON value, must be an object
            source: Name of the decoded document, used in error messages

        Returns:
            New instance of the record shape

        Raises:
            MalformedJsonError: if the value is not an object or a field
                cannot be decoded.
            MissingNestedValueError: if a nested field decodes to nothing.
        """
        if not isinstance(value, dict):
            raise MalformedJsonError(
                f"Expected a JSON object but found {type(value).__name__}",
                source, self.shape.__qualname__,
            )

        values: dict[str, Any] = {}

        for key, spec in self.table.plain.items():
            raw = value.get(key)
            if raw is not None:
                values[spec.name] = coerce_plain(raw, spec.value_type, source, self.location(spec))

        for key, spec in self.table.nested.items():
            if key in value:
                values[spec.name] = self.resolve_nested(spec, value[key], source)

        for key, spec in self.table.list_like.items():
            if key in value:
                values[spec.name] = normalize_list(
                    value[key], spec.element, source, self.location(spec)
                )

        return self.shape(**values)

    def decode_many(self, values: list[Any], source: str = "<string>") -> list[T]:
        """Decode every element of a JSON array; the first failure aborts."""
        return [self.decode(value, source) for value in values]

    def resolve_nested(self, spec: FieldSpec, value: Any, source: str) -> Any:
        """Resolve a nested field into its value type.

        Scalars go through the value type's ``from_primitive`` constructor,
        objects are decoded recursively with a `RecordStoreBuilder`.
        """
        target = spec.value_type
        if is_scalar(value):
            from_primitive = getattr(target, "from_primitive", None)
            if from_primitive is None:
                raise MalformedJsonError(
                    f"{getattr(target, '__qualname__', target)} cannot be built from a bare value",
                    source, self.location(spec),
                )
            return from_primitive(value)
        return self.build_nested(spec, target, value, source)

    def build_nested(
        self,
        spec: FieldSpec,
        shape: type,
        value: Any,
        source: str,
        many: bool = False,
        decoder: Optional[type["RecordDecoder[Any]"]] = None,
    ) -> Any:
        """Decode a nested JSON value through a `RecordStoreBuilder`.

        Args:
            spec: Descriptor of the owning field
            shape: Record shape to decode into
            value: Raw JSON value
            source: Name of the decoded document
            many: Expect a JSON array of objects instead of one object
            decoder: Decoder class for `shape`, `RecordDecoder` by default

        Raises:
            MissingNestedValueError: if the value decodes to nothing.
        """
        from .builder import RecordStoreBuilder

        builder = RecordStoreBuilder.create().of_type(shape).with_decoder(decoder or RecordDecoder)
        builder = builder.as_list() if many else builder.as_single()

        result = builder.build_from_value(value, source)
        if result is None:
            raise MissingNestedValueError(self.shape, spec.json_key)
        return result
