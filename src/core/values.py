"""Structural classification of dynamically shaped record values.

Records arrive as JSON-compatible trees. This module maps every value onto
a closed set of kinds so validation and transforms can dispatch on a single
enum instead of ad-hoc isinstance chains.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
import math
from typing import Any, Mapping, Sequence, Union

Scalar = Union[str, int, float, bool, date, datetime]
Value = Any
Record = Mapping[str, Any]


class ValueKind(str, Enum):
    """Closed set of structural value kinds."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    NULL = "null"
    UNKNOWN = "unknown"


DECLARABLE_KINDS = (
    ValueKind.STRING,
    ValueKind.NUMBER,
    ValueKind.BOOLEAN,
    ValueKind.DATE,
    ValueKind.SEQUENCE,
    ValueKind.MAPPING,
)
SCALAR_KINDS = (ValueKind.STRING, ValueKind.NUMBER, ValueKind.BOOLEAN, ValueKind.DATE)


def value_kind(value: Value) -> ValueKind:
    """Classify a value into its structural kind.

    Args:
        value: Any record value.

    Returns:
        The matching kind. ``bool`` is never a number and strings are
        never sequences.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, date):
        return ValueKind.DATE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if is_sequence(value):
        return ValueKind.SEQUENCE
    return ValueKind.UNKNOWN


def is_mapping(value: Value) -> bool:
    """Return whether a value is a key/value mapping."""
    return isinstance(value, Mapping)


def is_sequence(value: Value) -> bool:
    """Return whether a value is a list-like sequence of values."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def stringify_value(value: Value) -> str:
    """Render a value as a deterministic string.

    Used for fingerprints, map-table lookups and length comparisons, so
    equal values always render identically.

    Args:
        value: Any record value.

    Returns:
        Stable string form of the value.
    """
    kind = value_kind(value)
    if kind is ValueKind.NULL:
        return "null"
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind is ValueKind.NUMBER:
        return _stringify_number(value)
    if kind is ValueKind.STRING:
        return value
    if kind is ValueKind.DATE:
        return value.isoformat()
    if kind is ValueKind.SEQUENCE:
        return ",".join(stringify_value(item) for item in value)
    if kind is ValueKind.MAPPING:
        return _stringify_mapping(value)
    return str(value)


def _stringify_number(value: int | float) -> str:
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _stringify_mapping(value: Mapping[object, object]) -> str:
    # Keys may mix types (YAML allows int and str keys side by side).
    rendered_items = sorted(
        (stringify_value(key), stringify_value(item)) for key, item in value.items()
    )
    return "{" + ",".join(f"{key}:{item}" for key, item in rendered_items) + "}"
