"""Unit tests for recursive schema validation."""

from __future__ import annotations

from datetime import date

import pytest

from core.types import ValidationCode
from schema.schema_builder import build_schema
from validation.field_checks import check_date
from validation.validator import SchemaValidator, validate, validate_records


def _codes_by_field(result) -> list[tuple[str, str]]:
    return [(issue.field, issue.code.value) for issue in result.errors]


def test_validate_missing_required_field_reports_one_error() -> None:
    """An empty record should only report the missing required field."""
    result = validate({}, {"age": {"kind": "number", "required": True}})

    assert not result.is_valid
    assert _codes_by_field(result) == [("age", "REQUIRED_FIELD")]


def test_validate_type_mismatch_short_circuits_other_checks() -> None:
    """A kind mismatch should produce exactly one INVALID_TYPE error."""
    result = validate(
        {"age": "forty"},
        {"age": {"kind": "number", "min": 50, "allowedValues": [60]}},
    )

    assert _codes_by_field(result) == [("age", "INVALID_TYPE")]


def test_validate_value_above_maximum_reports_max_value() -> None:
    """A number above max should fail with MAX_VALUE only."""
    result = validate(
        {"age": 200},
        {"age": {"kind": "number", "required": True, "min": 0, "max": 150}},
    )

    assert not result.is_valid
    assert _codes_by_field(result) == [("age", "MAX_VALUE")]


def test_validate_sequence_items_use_bracketed_paths() -> None:
    """Sequence elements should be checked against the item spec."""
    result = validate(
        {"ids": ["P1", "", "P3"]},
        {"ids": {"kind": "sequence", "itemSpec": {"kind": "string", "minLength": 1}}},
    )

    assert not result.is_valid
    assert _codes_by_field(result) == [("ids[1]", "MIN_LENGTH")]


def test_validate_nested_mapping_reports_dotted_paths(
    patient_schema_payload: dict[str, object],
) -> None:
    """Nested properties should be validated at dotted paths."""
    record = {"patientId": "P1", "age": 40, "demographics": {"age": -1}}

    result = validate(record, patient_schema_payload)

    assert _codes_by_field(result) == [
        ("demographics.sex", "REQUIRED_FIELD"),
        ("demographics.age", "MIN_VALUE"),
    ]


def test_validate_non_mapping_root_reports_root_type_error() -> None:
    """Top-level values must be mappings."""
    result = validate(["not", "a", "record"], {"age": {"kind": "number", "required": True}})

    assert _codes_by_field(result) == [("root", "INVALID_TYPE")]


@pytest.mark.parametrize("value", ["", 0, False])
def test_validate_falsy_values_satisfy_required_presence(value: object) -> None:
    """Only key absence should trigger REQUIRED_FIELD."""
    result = validate({"flag": value}, {"flag": {"kind": "string", "required": True}})

    assert ValidationCode.REQUIRED_FIELD not in result.error_codes()


def test_validate_null_value_fails_kind_check() -> None:
    """Explicit null should fail with INVALID_TYPE rather than REQUIRED_FIELD."""
    result = validate({"age": None}, {"age": {"kind": "number", "required": True}})

    assert _codes_by_field(result) == [("age", "INVALID_TYPE")]


def test_validate_nullable_field_accepts_null() -> None:
    """Fields declared nullable should accept explicit null."""
    result = validate({"age": None}, {"age": {"kind": "number", "nullable": True, "min": 1}})

    assert result.is_valid


def test_validate_ignores_undeclared_fields() -> None:
    """Keys missing from the schema should be ignored."""
    result = validate({"age": 3, "extra": object()}, {"age": {"kind": "number"}})

    assert result.is_valid


def test_validate_string_constraints_accumulate() -> None:
    """All string constraint failures should be reported together."""
    result = validate(
        {"code": "abcdef"},
        {"code": {"kind": "string", "maxLength": 3, "pattern": "^[A-Z]+$"}},
    )

    assert result.error_codes() == (
        ValidationCode.MAX_LENGTH,
        ValidationCode.PATTERN_MISMATCH,
    )


def test_validate_allowed_values_runs_after_kind_checks() -> None:
    """Membership is checked after kind-specific checks."""
    result = validate(
        {"status": "x"},
        {"status": {"kind": "string", "minLength": 2, "allowedValues": ["active"]}},
    )

    assert result.error_codes() == (ValidationCode.MIN_LENGTH, ValidationCode.INVALID_VALUE)


def test_validate_allowed_values_compare_within_kind() -> None:
    """A boolean should not match an allowed numeric 1."""
    result = validate({"flag": True}, {"flag": {"kind": "boolean", "allowedValues": [1]}})

    assert result.error_codes() == (ValidationCode.INVALID_VALUE,)


def test_validate_boolean_is_not_a_number() -> None:
    """Booleans should fail number fields."""
    result = validate({"age": True}, {"age": {"kind": "number"}})

    assert result.error_codes() == (ValidationCode.INVALID_TYPE,)


def test_validate_date_fields_accept_dates_and_reject_strings() -> None:
    """Date kind needs a real date value; ISO strings are strings."""
    schema = {"visits": {"kind": "sequence", "itemSpec": {"kind": "date"}}}

    result = validate({"visits": [date(2024, 1, 2), "2024-01-03"]}, schema)

    assert _codes_by_field(result) == [("visits[1]", "INVALID_TYPE")]


def test_validate_never_reports_warnings_for_errors() -> None:
    """Warnings stay empty and do not affect validity."""
    result = validate({"age": 1}, {"age": {"kind": "number"}})

    assert result.is_valid
    assert result.warnings == ()


def test_schema_validator_reuses_bound_schema() -> None:
    """A bound validator should give identical results across calls."""
    validator = SchemaValidator(build_schema({"age": {"kind": "number", "max": 10}}))

    first = validator.validate({"age": 11})
    second = validator.validate({"age": 11})

    assert first == second


def test_validate_records_splits_valid_and_invalid(
    patient_schema_payload: dict[str, object],
) -> None:
    """Batch validation should keep indexes of invalid records."""
    records = [
        {"patientId": "P1", "age": 30},
        {"patientId": "X1", "age": 30},
        "not a record",
    ]

    batch = validate_records(records, patient_schema_payload)

    assert batch.valid == ({"patientId": "P1", "age": 30},)
    assert [row.index for row in batch.invalid] == [1, 2]
    assert batch.invalid[0].result.error_codes() == (ValidationCode.PATTERN_MISMATCH,)


def test_date_string_is_a_type_error_not_an_invalid_date() -> None:
    """ISO strings fail the kind check; check_date only flags non-dates."""
    schema = build_schema({"visit": {"kind": "date"}})

    result = validate({"visit": "2024-02-30"}, schema)

    assert result.error_codes() == (ValidationCode.INVALID_TYPE,)
    assert check_date("visit", date(2024, 2, 29)) == []
    assert [issue.code for issue in check_date("visit", "2024-02-30")] == [
        ValidationCode.INVALID_DATE
    ]
