"""Recursive schema validator for dynamically shaped records.

The validator never raises for record content. Every problem becomes a
``ValidationIssue`` with a stable code, and callers branch on
``ValidationResult.is_valid``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from core.constants import ROOT_FIELD_PATH
from core.logging_config import get_logger
from core.types import ValidationCode, ValidationIssue, ValidationResult
from core.values import Value, ValueKind, value_kind
from schema.field_spec import FieldSpec, Schema
from schema.schema_builder import build_schema
from validation.field_checks import (
    check_allowed_values,
    check_date,
    check_mapping,
    check_number,
    check_sequence,
    check_string,
    required_field_issue,
)

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class RecordValidation:
    """Validation outcome for one record of a batch.

    Attributes:
        index: Zero-based position of the record in the batch.
        record: The validated record.
        result: Validation result for the record.
    """

    index: int
    record: Value
    result: ValidationResult


@dataclass(frozen=True)
class ValidationBatch:
    """Batch validation split into valid and invalid records."""

    valid: tuple[Value, ...]
    invalid: tuple[RecordValidation, ...]


def validate(record: Value, schema: Schema | Mapping[str, object]) -> ValidationResult:
    """Validate one record against a schema.

    Args:
        record: Dynamically shaped record, expected to be a mapping.
        schema: Schema object or plain schema data.

    Returns:
        Result holding every error found, in check order.

    Raises:
        HarmoniaSchemaError: If ``schema`` is plain data that does not
            describe a valid schema.
    """
    return SchemaValidator(build_schema(schema)).validate(record)


def validate_records(
    records: Iterable[Value],
    schema: Schema | Mapping[str, object],
) -> ValidationBatch:
    """Validate many records and split them by validity.

    Args:
        records: Records to validate.
        schema: Schema object or plain schema data.

    Returns:
        Valid records and per-record results for invalid ones.
    """
    validator = SchemaValidator(build_schema(schema))
    valid_records: list[Value] = []
    invalid_records: list[RecordValidation] = []
    for index, record in enumerate(records):
        result = validator.validate(record)
        if result.is_valid:
            valid_records.append(record)
            continue
        invalid_records.append(RecordValidation(index=index, record=record, result=result))
        _LOGGER.warning(
            "record_validation_failed",
            record_index=index,
            error_codes=[code.value for code in result.error_codes()],
        )
    _LOGGER.info(
        "record_validation_completed",
        valid_count=len(valid_records),
        invalid_count=len(invalid_records),
    )
    return ValidationBatch(valid=tuple(valid_records), invalid=tuple(invalid_records))


class SchemaValidator:
    """Validator bound to one immutable schema."""

    def __init__(self, schema: Schema) -> None:
        self._schema = schema

    @property
    def schema(self) -> Schema:
        """Return the bound schema."""
        return self._schema

    def validate(self, record: Value) -> ValidationResult:
        """Validate one record against the bound schema.

        Args:
            record: Dynamically shaped record.

        Returns:
            Validation result; invalid when any error was found.
        """
        if value_kind(record) is not ValueKind.MAPPING:
            root_issue = ValidationIssue(
                field=ROOT_FIELD_PATH,
                message="Data must be an object",
                code=ValidationCode.INVALID_TYPE,
            )
            return ValidationResult(errors=(root_issue,))
        errors: list[ValidationIssue] = []
        for field_name in self._schema.required_fields():
            if field_name not in record:
                errors.append(required_field_issue(field_name))
        for field_name, value in record.items():
            if field_name in self._schema:
                errors.extend(validate_field(field_name, value, self._schema[field_name]))
        return ValidationResult(errors=tuple(errors))


def validate_field(field_path: str, value: Value, spec: FieldSpec) -> list[ValidationIssue]:
    """Validate one value against its field spec.

    A kind mismatch yields exactly one ``INVALID_TYPE`` issue and skips
    every other check for the field.

    Args:
        field_path: Dotted/bracketed location of the value.
        value: Value to check.
        spec: Field specification.

    Returns:
        Issues found for this value and its nested children.
    """
    actual_kind = value_kind(value)
    if actual_kind is ValueKind.NULL and spec.nullable:
        return []
    if actual_kind is not spec.kind:
        return [
            ValidationIssue(
                field=field_path,
                message=(
                    f"Field {field_path} must be of type {spec.kind.value}, "
                    f"got {actual_kind.value}"
                ),
                code=ValidationCode.INVALID_TYPE,
            )
        ]
    issues = _check_kind(field_path, value, spec)
    issues.extend(check_allowed_values(field_path, value, spec))
    return issues


def _check_kind(field_path: str, value: Value, spec: FieldSpec) -> list[ValidationIssue]:
    if spec.kind is ValueKind.STRING:
        return check_string(field_path, value, spec)
    if spec.kind is ValueKind.NUMBER:
        return check_number(field_path, value, spec)
    if spec.kind is ValueKind.DATE:
        return check_date(field_path, value)
    if spec.kind is ValueKind.SEQUENCE:
        return check_sequence(field_path, value, spec, validate_field)
    if spec.kind is ValueKind.MAPPING:
        return check_mapping(field_path, value, spec, validate_field)
    return []
