"""Unit tests for CLI record readers."""

from __future__ import annotations

from datetime import date

import pytest

from cli.record_io import read_records, read_single_record, render_json_line
from core.errors import HarmoniaInputError
from tests.fixture_paths import fixture_path


def test_read_records_skips_blank_jsonl_lines() -> None:
    """JSONL input should ignore blank lines."""
    records = read_records(str(fixture_path("records/patients.jsonl")))

    assert len(records) == 4


def test_read_records_parses_yaml_dates() -> None:
    """YAML input should yield real date values."""
    records = read_records(str(fixture_path("records/visits.yaml")))

    assert records[0]["visits"][0] == date(2024, 1, 2)


def test_read_records_wraps_single_json_object(tmp_path) -> None:
    """A JSON file holding one object should yield one record."""
    source = tmp_path / "one.json"
    source.write_text('{"a": 1}', encoding="utf-8")

    assert read_records(str(source)) == [{"a": 1}]


def test_read_records_reports_invalid_jsonl_line(tmp_path) -> None:
    """Invalid JSONL rows should raise with the line location."""
    source = tmp_path / "bad.jsonl"
    source.write_text('{"a": 1}\n{"a": \n', encoding="utf-8")

    with pytest.raises(HarmoniaInputError, match="bad.jsonl:2"):
        read_records(str(source))


@pytest.mark.parametrize("suffix", [".json", ".jsonl", ".yaml"])
def test_read_records_reports_non_utf8_files(tmp_path, suffix: str) -> None:
    """Files that are not UTF-8 should raise an input error, not a decode error."""
    source = tmp_path / f"latin1{suffix}"
    source.write_bytes('[{"name": "Renée"}]'.encode("latin-1"))

    with pytest.raises(HarmoniaInputError, match="UTF-8"):
        read_records(str(source))


def test_read_records_rejects_unsupported_extension(tmp_path) -> None:
    """Only JSON, JSONL and YAML files are accepted."""
    source = tmp_path / "records.csv"
    source.write_text("a,b\n", encoding="utf-8")

    with pytest.raises(HarmoniaInputError):
        read_records(str(source))


def test_read_single_record_requires_exactly_one(tmp_path) -> None:
    """Merge inputs must hold exactly one record."""
    source = tmp_path / "two.json"
    source.write_text('[{"a": 1}, {"a": 2}]', encoding="utf-8")

    with pytest.raises(HarmoniaInputError):
        read_single_record(str(source))


def test_render_json_line_serializes_dates() -> None:
    """Dates should render as ISO strings."""
    assert render_json_line({"d": date(2024, 1, 2)}) == '{"d": "2024-01-02"}'
