"""
Field declarations for decodable record shapes.

A record shape is a dataclass. Each of its fields is either *plain*
(decoded by ordinary structural rules), *list-like* (a JSON scalar or
array normalized to a tuple of strings) or *nested* (decoded into a
dedicated value type). Declarations live in the dataclass field metadata;
`describe` turns them into a `FieldTable` once per shape.
"""

import dataclasses
import types
import typing
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Optional

from ..errors import SchemaDeclarationError

# Metadata keys stored on dataclass fields
KIND_KEY = "tilecov_kind"
JSON_KEY = "tilecov_json_key"
ELEMENT_KEY = "tilecov_element"

ElementConverter = Callable[[Any], Any]
"""Turns one non-scalar list element into a scalar before string conversion."""


class FieldKind(Enum):
    """How a record field is decoded from JSON."""
    PLAIN = "plain"
    LIST_LIKE = "list_like"
    NESTED = "nested"


def plain(json_key: Optional[str] = None, default: Any = None) -> Any:
    """Declare a plain field, optionally read from a differently named JSON key."""
    metadata = {KIND_KEY: FieldKind.PLAIN, JSON_KEY: json_key}
    return dataclasses.field(default=default, metadata=metadata)


def list_like(json_key: Optional[str] = None, element: Optional[ElementConverter] = None) -> Any:
    """Declare a field that may be written as a scalar or as an array.

    Args:
        json_key: JSON key to read, defaults to the field name
        element: Optional converter applied to array elements that are not
                 JSON scalars. Without it such elements are a parse error.
    """
    metadata = {KIND_KEY: FieldKind.LIST_LIKE, JSON_KEY: json_key, ELEMENT_KEY: element}
    return dataclasses.field(default_factory=tuple, metadata=metadata)


def nested(json_key: Optional[str] = None, default: Any = None) -> Any:
    """Declare a field decoded into a structured value type."""
    metadata = {KIND_KEY: FieldKind.NESTED, JSON_KEY: json_key}
    return dataclasses.field(default=default, metadata=metadata)


@dataclass(frozen=True)
class FieldSpec:
    """Static descriptor for one field of a record shape."""
    name: str
    json_key: str
    kind: FieldKind
    annotation: Any
    element: Optional[ElementConverter] = None

    @property
    def value_type(self) -> Any:
        """Field annotation with `Optional[...]` removed."""
        return unwrap_optional(self.annotation)


@dataclass(frozen=True)
class FieldTable:
    """Lookup tables from JSON key to field descriptor, split by field kind."""
    shape: type
    plain: dict[str, FieldSpec]
    list_like: dict[str, FieldSpec]
    nested: dict[str, FieldSpec]


def unwrap_optional(annotation: Any) -> Any:
    """Return `X` for `Optional[X]`, the annotation unchanged otherwise."""
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


@lru_cache(maxsize=None)
def describe(shape: type) -> FieldTable:
    """Build the field table for a record shape.

    Called at configuration time; the result is cached per shape and only
    read afterwards, so decoders built on it may be shared between threads.

    Raises:
        SchemaDeclarationError: if `shape` is not a dataclass or two fields
            claim the same JSON key.
    """
    if not dataclasses.is_dataclass(shape):
        raise SchemaDeclarationError(f"Record shape {shape!r} is not a dataclass")

    tables: dict[FieldKind, dict[str, FieldSpec]] = {kind: {} for kind in FieldKind}
    claimed: dict[str, str] = {}

    for field in dataclasses.fields(shape):
        if not field.init:
            continue
        kind = field.metadata.get(KIND_KEY, FieldKind.PLAIN)
        json_key = field.metadata.get(JSON_KEY) or field.name

        if json_key in claimed:
            raise SchemaDeclarationError(
                f"Fields '{claimed[json_key]}' and '{field.name}' of "
                f"{shape.__qualname__} are both declared for JSON key '{json_key}'"
            )
        claimed[json_key] = field.name

        tables[kind][json_key] = FieldSpec(
            name=field.name,
            json_key=json_key,
            kind=kind,
            annotation=field.type,
            element=field.metadata.get(ELEMENT_KEY),
        )

    return FieldTable(
        shape=shape,
        plain=tables[FieldKind.PLAIN],
        list_like=tables[FieldKind.LIST_LIKE],
        nested=tables[FieldKind.NESTED],
    )
