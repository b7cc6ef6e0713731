"""
Schema-tolerant JSON decoding.

Record shapes are dataclasses whose fields are declared plain, list-like or
nested. `RecordDecoder` decodes JSON objects into such shapes and
`RecordStoreBuilder` wraps it with file and string entry points.

Usage:
    from cata_tilecov.decoding import RecordStoreBuilder

    records = RecordStoreBuilder.create().of_type(Shape).as_list().build(path)
"""

from .fields import FieldKind, FieldSpec, FieldTable, describe, list_like, nested, plain
from .values import TextValue, normalize_list
from .decoder import RecordDecoder
from .builder import Arity, RecordStoreBuilder

__all__ = [
    # Declarations
    "FieldKind",
    "FieldSpec",
    "FieldTable",
    "describe",
    "list_like",
    "nested",
    "plain",
    # Values
    "TextValue",
    "normalize_list",
    # Decoding
    "RecordDecoder",
    "Arity",
    "RecordStoreBuilder",
]
