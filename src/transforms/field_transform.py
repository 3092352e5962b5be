"""Field-level transformation rules.

A transformation rule is one of a closed set: a named string operation, a
table-driven value mapping, or a pass-through for rule shapes that are not
recognized. Plain rule data is parsed into that set before it is applied.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union

from core.constants import MAP_TRANSFORM_KIND, SUPPORTED_NAMED_TRANSFORMS
from core.errors import HarmoniaRuleError
from core.values import Value, stringify_value


class NamedTransform(str, Enum):
    """String operations addressed by name."""

    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"
    TRIM = "trim"


@dataclass(frozen=True)
class MapTransform:
    """Replace values found in a lookup table.

    Attributes:
        table: Stringified source value to replacement value.
    """

    table: Mapping[str, Value]

    def __post_init__(self) -> None:
        frozen_table = {stringify_value(key): value for key, value in self.table.items()}
        object.__setattr__(self, "table", MappingProxyType(frozen_table))


@dataclass(frozen=True)
class PassThroughTransform:
    """Leave values unchanged; used for unrecognized rule shapes."""

    raw_rule: object = field(default=None, compare=False)


TransformationRule = Union[NamedTransform, MapTransform, PassThroughTransform]


def parse_transformation_rule(raw_rule: object, strict: bool = False) -> TransformationRule:
    """Parse plain rule data into a typed transformation rule.

    Args:
        raw_rule: A rule name, a ``{kind: map, table: {...}}`` mapping, or
            an already typed rule.
        strict: Raise for unrecognized shapes instead of passing through.

    Returns:
        Typed rule.

    Raises:
        HarmoniaRuleError: If ``strict`` and the rule is not recognized.
    """
    if isinstance(raw_rule, (NamedTransform, MapTransform, PassThroughTransform)):
        return raw_rule
    if isinstance(raw_rule, str):
        if raw_rule in SUPPORTED_NAMED_TRANSFORMS:
            return NamedTransform(raw_rule)
        return _unrecognized(raw_rule, strict, f"unknown transform name '{raw_rule}'")
    if isinstance(raw_rule, Mapping):
        return _parse_map_rule(raw_rule, strict)
    return _unrecognized(raw_rule, strict, f"unsupported rule type {type(raw_rule).__name__}")


def parse_transformation_rules(
    raw_rules: Mapping[str, object],
    strict: bool = False,
) -> dict[str, TransformationRule]:
    """Parse a field-name to rule mapping, preserving order."""
    if not isinstance(raw_rules, Mapping):
        raise HarmoniaRuleError(
            f"Transformation rules must be a mapping, got {type(raw_rules).__name__}."
        )
    return {
        str(field_name): parse_transformation_rule(raw_rule, strict)
        for field_name, raw_rule in raw_rules.items()
    }


def apply_rule(value: Value, rule: object) -> Value:
    """Apply one transformation rule to a value.

    Named operations only touch strings; map rules replace values found in
    their table; anything else returns ``value`` unchanged.

    Args:
        value: Field value.
        rule: Typed rule or plain rule data.

    Returns:
        Transformed value.
    """
    typed_rule = parse_transformation_rule(rule)
    if isinstance(typed_rule, NamedTransform):
        return _apply_named(value, typed_rule)
    if isinstance(typed_rule, MapTransform):
        lookup_key = stringify_value(value)
        if lookup_key in typed_rule.table:
            return typed_rule.table[lookup_key]
        return value
    return value


def _apply_named(value: Value, rule: NamedTransform) -> Value:
    if not isinstance(value, str):
        return value
    if rule is NamedTransform.UPPERCASE:
        return value.upper()
    if rule is NamedTransform.LOWERCASE:
        return value.lower()
    return value.strip()


def _parse_map_rule(raw_rule: Mapping[object, object], strict: bool) -> TransformationRule:
    rule_kind = raw_rule.get("kind", raw_rule.get("type"))
    table = raw_rule.get("table", raw_rule.get("mapping"))
    if rule_kind != MAP_TRANSFORM_KIND:
        return _unrecognized(raw_rule, strict, f"unsupported rule kind {rule_kind!r}")
    if not isinstance(table, Mapping):
        return _unrecognized(raw_rule, strict, "map rule requires a 'table' mapping")
    return MapTransform(table=table)


def _unrecognized(raw_rule: object, strict: bool, reason: str) -> TransformationRule:
    if strict:
        raise HarmoniaRuleError(
            f"Invalid transformation rule {raw_rule!r}: {reason}. "
            f"Use one of {', '.join(SUPPORTED_NAMED_TRANSFORMS)} or "
            "{kind: map, table: {...}}."
        )
    return PassThroughTransform(raw_rule=raw_rule)
