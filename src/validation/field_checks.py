"""Kind-specific constraint checks for a single field value.

Each check receives a value already known to match the declared kind and
returns the issues it finds. Recursion into sequences and mappings is
driven by the validator, which passes itself in as ``validate_field``.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Mapping, Sequence

from core.types import ValidationCode, ValidationIssue
from core.values import Value, value_kind
from schema.field_spec import FieldSpec

FieldValidator = Callable[[str, Value, FieldSpec], list[ValidationIssue]]


def check_string(field_path: str, value: str, spec: FieldSpec) -> list[ValidationIssue]:
    """Check string length bounds and pattern."""
    issues: list[ValidationIssue] = []
    if spec.min_length is not None and len(value) < spec.min_length:
        issues.append(
            ValidationIssue(
                field=field_path,
                message=f"Field {field_path} must have at least {spec.min_length} characters",
                code=ValidationCode.MIN_LENGTH,
            )
        )
    if spec.max_length is not None and len(value) > spec.max_length:
        issues.append(
            ValidationIssue(
                field=field_path,
                message=f"Field {field_path} must have at most {spec.max_length} characters",
                code=ValidationCode.MAX_LENGTH,
            )
        )
    if spec.pattern is not None and spec.pattern.search(value) is None:
        issues.append(
            ValidationIssue(
                field=field_path,
                message=f"Field {field_path} does not match the required pattern",
                code=ValidationCode.PATTERN_MISMATCH,
            )
        )
    return issues


def check_number(field_path: str, value: float, spec: FieldSpec) -> list[ValidationIssue]:
    """Check numeric lower and upper bounds."""
    issues: list[ValidationIssue] = []
    if spec.min_value is not None and value < spec.min_value:
        issues.append(
            ValidationIssue(
                field=field_path,
                message=f"Field {field_path} must be at least {spec.min_value}",
                code=ValidationCode.MIN_VALUE,
            )
        )
    if spec.max_value is not None and value > spec.max_value:
        issues.append(
            ValidationIssue(
                field=field_path,
                message=f"Field {field_path} must be at most {spec.max_value}",
                code=ValidationCode.MAX_VALUE,
            )
        )
    return issues


def check_date(field_path: str, value: object) -> list[ValidationIssue]:
    """Check that a date-kind value is a real calendar date.

    Python ``date`` objects cannot hold impossible dates, so after the kind
    check this only fails for values passed in directly.
    """
    if isinstance(value, date):
        return []
    return [
        ValidationIssue(
            field=field_path,
            message=f"Field {field_path} must be a valid date",
            code=ValidationCode.INVALID_DATE,
        )
    ]


def check_sequence(
    field_path: str,
    value: Sequence[Value],
    spec: FieldSpec,
    validate_field: FieldValidator,
) -> list[ValidationIssue]:
    """Validate every element against the item spec, when declared."""
    if spec.item_spec is None:
        return []
    issues: list[ValidationIssue] = []
    for index, item in enumerate(value):
        issues.extend(validate_field(f"{field_path}[{index}]", item, spec.item_spec))
    return issues


def check_mapping(
    field_path: str,
    value: Mapping[str, Value],
    spec: FieldSpec,
    validate_field: FieldValidator,
) -> list[ValidationIssue]:
    """Validate declared nested properties of a mapping value."""
    if spec.property_specs is None:
        return []
    issues: list[ValidationIssue] = []
    for property_name, property_spec in spec.property_specs.items():
        property_path = f"{field_path}.{property_name}"
        if property_name in value:
            issues.extend(validate_field(property_path, value[property_name], property_spec))
        elif property_spec.required:
            issues.append(required_field_issue(property_path))
    return issues


def check_allowed_values(field_path: str, value: Value, spec: FieldSpec) -> list[ValidationIssue]:
    """Check membership in the declared allowed values.

    Membership requires the same kind, so ``True`` never matches ``1``.
    """
    if spec.allowed_values is None:
        return []
    kind = value_kind(value)
    for allowed_value in spec.allowed_values:
        if value_kind(allowed_value) is kind and allowed_value == value:
            return []
    allowed_rows = ", ".join(str(allowed_value) for allowed_value in spec.allowed_values)
    return [
        ValidationIssue(
            field=field_path,
            message=f"Field {field_path} must be one of: {allowed_rows}",
            code=ValidationCode.INVALID_VALUE,
        )
    ]


def required_field_issue(field_path: str) -> ValidationIssue:
    """Build the issue reported for a missing required key."""
    return ValidationIssue(
        field=field_path,
        message=f"Field {field_path} is required",
        code=ValidationCode.REQUIRED_FIELD,
    )
