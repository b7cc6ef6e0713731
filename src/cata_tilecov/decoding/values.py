"""
Value-level decoding helpers.

`normalize_list` implements the scalar-or-array convention used all over
the game data: ``"color": "red"`` and ``"color": ["red", "blue"]`` both
decode to a tuple of strings. `TextValue` is the structured value used for
translatable strings, which the game writes either as a bare string or as
an object with ``str``/``str_pl``/``str_sp`` members.
"""

from dataclasses import dataclass
from typing import Any, Optional

from ..errors import MalformedJsonError
from .fields import ElementConverter, plain

JSON_SCALARS = (str, int, float, bool)


def is_scalar(value: Any) -> bool:
    """Return True for JSON strings, numbers and booleans."""
    return isinstance(value, JSON_SCALARS)


def scalar_to_str(value: Any) -> str:
    """Render a JSON scalar the way it is written in the source file."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def normalize_list(
    value: Any,
    element: Optional[ElementConverter] = None,
    source: str = "<string>",
    location: str = "",
) -> tuple[str, ...]:
    """Decode a list-like JSON value into an ordered tuple of strings.

    Args:
        value: Raw JSON value of the field
        element: Optional converter for non-scalar values and array elements
        source: Name of the decoded document, used in error messages
        location: Field location, used in error messages

    Returns:
        Empty tuple for null, a single-element tuple for a scalar, the
        array elements in source order otherwise.

    Raises:
        MalformedJsonError: if the value or any array element cannot be
            decoded as a string.
    """
    if value is None:
        return ()
    if isinstance(value, list):
        result: list[str] = []
        for index, item in enumerate(value):
            if not is_scalar(item) and element is not None:
                item = element(item)
            if not is_scalar(item):
                raise MalformedJsonError(
                    f"Expected a string but found {type(item).__name__}",
                    source, f"{location}[{index}]",
                )
            result.append(scalar_to_str(item))
        return tuple(result)
    if not is_scalar(value) and element is not None:
        value = element(value)
    if not is_scalar(value):
        raise MalformedJsonError(
            f"Expected a string or an array of strings but found {type(value).__name__}",
            source, location,
        )
    return (scalar_to_str(value),)


@dataclass(frozen=True)
class TextValue:
    """Translatable game text.

    The game writes names either as ``"name": "rock"`` or as
    ``"name": {"str": "rock", "str_pl": "rocks"}``; ``str_sp`` is used when
    singular and plural forms are identical.
    """
    text: Optional[str] = plain("str")
    plural: Optional[str] = plain("str_pl")
    same_plural: Optional[str] = plain("str_sp")
    context: Optional[str] = plain("ctxt")

    @classmethod
    def from_primitive(cls, value: Any) -> "TextValue":
        """Create a TextValue from a bare JSON scalar."""
        return cls(text=scalar_to_str(value))

    def get(self) -> str:
        """Return the display text, empty if none was given."""
        return self.text or self.same_plural or ""

    def __str__(self) -> str:
        return self.get()
