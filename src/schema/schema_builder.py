"""Build schemas from plain configuration data.

Schemas are usually authored as JSON or YAML. This module converts those
payloads into immutable ``Schema`` objects, accepting both snake_case and
camelCase constraint names, and rejects anything it does not understand.
"""

from __future__ import annotations

import re
from typing import Mapping

from core.errors import HarmoniaSchemaError
from core.values import ValueKind
from schema.field_spec import FieldSpec, Schema

_KIND_ALIASES = {
    "string": ValueKind.STRING,
    "number": ValueKind.NUMBER,
    "boolean": ValueKind.BOOLEAN,
    "date": ValueKind.DATE,
    "sequence": ValueKind.SEQUENCE,
    "array": ValueKind.SEQUENCE,
    "mapping": ValueKind.MAPPING,
    "object": ValueKind.MAPPING,
}
_KEY_ALIASES = {
    "kind": "kind",
    "type": "kind",
    "required": "required",
    "nullable": "nullable",
    "min_length": "min_length",
    "minLength": "min_length",
    "max_length": "max_length",
    "maxLength": "max_length",
    "min": "min_value",
    "max": "max_value",
    "pattern": "pattern",
    "allowed_values": "allowed_values",
    "allowedValues": "allowed_values",
    "enum": "allowed_values",
    "item_spec": "item_spec",
    "itemSpec": "item_spec",
    "items": "item_spec",
    "property_specs": "property_specs",
    "propertySpecs": "property_specs",
    "properties": "property_specs",
}


def build_schema(payload: Mapping[str, object] | Schema) -> Schema:
    """Build an immutable schema from plain data.

    Args:
        payload: Mapping of field name to field-spec mapping. An existing
            ``Schema`` is returned unchanged.

    Returns:
        Validated schema.

    Raises:
        HarmoniaSchemaError: If any field definition is malformed.
    """
    if isinstance(payload, Schema):
        return payload
    if not isinstance(payload, Mapping):
        raise HarmoniaSchemaError(
            f"Invalid schema: expected mapping of fields, got {type(payload).__name__}."
        )
    fields = {
        str(field_name): build_field_spec(field_payload, str(field_name))
        for field_name, field_payload in payload.items()
    }
    return Schema(fields)


def build_field_spec(payload: object, field_path: str) -> FieldSpec:
    """Build one field specification from plain data.

    Args:
        payload: Field-spec mapping, or an existing ``FieldSpec``.
        field_path: Dotted path used in error messages.

    Returns:
        Validated field specification.

    Raises:
        HarmoniaSchemaError: If the definition is malformed.
    """
    if isinstance(payload, FieldSpec):
        return payload
    if not isinstance(payload, Mapping):
        raise HarmoniaSchemaError(
            f"Invalid field spec '{field_path}': expected mapping, got {type(payload).__name__}."
        )
    options = _normalize_keys(payload, field_path)
    if "kind" not in options:
        raise HarmoniaSchemaError(f"Field spec '{field_path}' is missing required key 'kind'.")
    kind = _parse_kind(options["kind"], field_path)
    required = _parse_flag(options, "required", field_path)
    nullable = _parse_flag(options, "nullable", field_path)
    pattern = _parse_pattern(options.get("pattern"), field_path)
    allowed_values = _parse_allowed_values(options.get("allowed_values"), field_path)
    item_spec = _parse_item_spec(options.get("item_spec"), field_path)
    property_specs = _parse_property_specs(options.get("property_specs"), field_path)
    try:
        return FieldSpec(
            kind=kind,
            required=required,
            nullable=nullable,
            min_length=options.get("min_length"),  # type: ignore[arg-type]
            max_length=options.get("max_length"),  # type: ignore[arg-type]
            min_value=options.get("min_value"),  # type: ignore[arg-type]
            max_value=options.get("max_value"),  # type: ignore[arg-type]
            pattern=pattern,
            allowed_values=allowed_values,
            item_spec=item_spec,
            property_specs=property_specs,
        )
    except HarmoniaSchemaError as error:
        raise HarmoniaSchemaError(f"Invalid field spec '{field_path}': {error}") from error


def _normalize_keys(payload: Mapping[object, object], field_path: str) -> dict[str, object]:
    options: dict[str, object] = {}
    for raw_key, value in payload.items():
        canonical_key = _KEY_ALIASES.get(raw_key) if isinstance(raw_key, str) else None
        if canonical_key is None:
            raise HarmoniaSchemaError(
                f"Field spec '{field_path}' contains unknown key {raw_key!r}."
            )
        if canonical_key in options:
            raise HarmoniaSchemaError(
                f"Field spec '{field_path}' declares '{canonical_key}' more than once."
            )
        options[canonical_key] = value
    return options


def _parse_kind(raw_kind: object, field_path: str) -> ValueKind:
    if isinstance(raw_kind, ValueKind):
        return raw_kind
    if isinstance(raw_kind, str) and raw_kind.strip().lower() in _KIND_ALIASES:
        return _KIND_ALIASES[raw_kind.strip().lower()]
    supported_rows = ", ".join(sorted(_KIND_ALIASES))
    raise HarmoniaSchemaError(
        f"Field spec '{field_path}' has unsupported kind {raw_kind!r}. "
        f"Use one of: {supported_rows}."
    )


def _parse_flag(options: Mapping[str, object], key: str, field_path: str) -> bool:
    value = options.get(key, False)
    if isinstance(value, bool):
        return value
    raise HarmoniaSchemaError(f"Field spec '{field_path}' key '{key}' must be true/false.")


def _parse_pattern(raw_pattern: object, field_path: str) -> re.Pattern[str] | None:
    if raw_pattern is None or isinstance(raw_pattern, re.Pattern):
        return raw_pattern
    if not isinstance(raw_pattern, str):
        raise HarmoniaSchemaError(f"Field spec '{field_path}' pattern must be a string.")
    try:
        return re.compile(raw_pattern)
    except re.error as error:
        raise HarmoniaSchemaError(
            f"Field spec '{field_path}' pattern {raw_pattern!r} does not compile: {error}."
        ) from error


def _parse_allowed_values(raw_values: object, field_path: str) -> tuple[object, ...] | None:
    if raw_values is None:
        return None
    if isinstance(raw_values, (list, tuple, set, frozenset)):
        return tuple(raw_values)
    raise HarmoniaSchemaError(f"Field spec '{field_path}' allowed_values must be a list.")


def _parse_item_spec(raw_item_spec: object, field_path: str) -> FieldSpec | None:
    if raw_item_spec is None:
        return None
    return build_field_spec(raw_item_spec, f"{field_path}[]")


def _parse_property_specs(
    raw_properties: object,
    field_path: str,
) -> Mapping[str, FieldSpec] | None:
    if raw_properties is None:
        return None
    if not isinstance(raw_properties, Mapping):
        raise HarmoniaSchemaError(
            f"Field spec '{field_path}' property_specs must be a mapping of field specs."
        )
    return {
        str(name): build_field_spec(property_payload, f"{field_path}.{name}")
        for name, property_payload in raw_properties.items()
    }
