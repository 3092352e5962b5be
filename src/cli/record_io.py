"""Record file readers and writers for the CLI.

This module loads JSON, JSONL and YAML record files into plain Python
values and renders harmonized records back to JSON lines. YAML input is
the way to feed real date values, since JSON has no date type.
"""

from __future__ import annotations

from datetime import date
import json
from pathlib import Path
from typing import Iterable

import yaml

from core.constants import SUPPORTED_RECORD_EXTENSIONS
from core.errors import HarmoniaInputError
from core.values import Value


def read_records(source_path: str) -> list[Value]:
    """Load records from a JSON, JSONL or YAML file.

    A JSON or YAML file may hold a list of records or a single record.

    Args:
        source_path: Path to a ``.json``, ``.jsonl``, ``.yaml`` or ``.yml`` file.

    Returns:
        Ordered list of records.

    Raises:
        HarmoniaInputError: If the file is missing, unsupported or invalid.
    """
    file_path = _resolve_input_file(source_path)
    if file_path.suffix.lower() == ".jsonl":
        return _read_jsonl_records(file_path)
    if file_path.suffix.lower() in (".yaml", ".yml"):
        payload = _parse_yaml_text(file_path)
    else:
        payload = _parse_json_text(file_path, _read_text(file_path), None)
    return list(payload) if isinstance(payload, list) else [payload]


def read_single_record(source_path: str) -> Value:
    """Load exactly one record from a JSON or JSONL file.

    Raises:
        HarmoniaInputError: If the file does not hold exactly one record.
    """
    records = read_records(source_path)
    if len(records) != 1:
        raise HarmoniaInputError(
            f"Expected exactly one record in {source_path}, found {len(records)}."
        )
    return records[0]


def render_json_line(value: Value) -> str:
    """Render one value as a compact JSON line."""
    return json.dumps(value, ensure_ascii=False, sort_keys=False, default=_json_default)


def render_json_lines(values: Iterable[Value]) -> str:
    """Render values as newline separated JSON lines."""
    return "\n".join(render_json_line(value) for value in values)


def _resolve_input_file(source_path: str) -> Path:
    file_path = Path(source_path).expanduser()
    if not file_path.is_file():
        raise HarmoniaInputError(
            f"Failed to read records at {file_path}: file does not exist. "
            "Provide an existing .json, .jsonl or .yaml file."
        )
    if file_path.suffix.lower() not in SUPPORTED_RECORD_EXTENSIONS:
        raise HarmoniaInputError(
            f"Unsupported record file {file_path}. "
            f"Supported extensions: {SUPPORTED_RECORD_EXTENSIONS}."
        )
    return file_path


def _read_text(file_path: Path) -> str:
    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as error:
        raise HarmoniaInputError(
            f"Failed to decode records at {file_path}: {error.reason} at byte {error.start}. "
            "Re-save the file as UTF-8 and retry."
        ) from error
    except OSError as error:
        raise HarmoniaInputError(
            f"Failed to read records at {file_path}: {error}. Check file permissions and retry."
        ) from error


def _read_jsonl_records(file_path: Path) -> list[Value]:
    records: list[Value] = []
    for line_number, line in enumerate(_read_text(file_path).splitlines(), 1):
        if not line.strip():
            continue
        records.append(_parse_json_text(file_path, line, line_number))
    return records


def _parse_json_text(file_path: Path, text: str, line_number: int | None) -> Value:
    location = f"{file_path}:{line_number}" if line_number is not None else str(file_path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as error:
        raise HarmoniaInputError(
            f"Failed to parse JSON record at {location}: {error.msg}. Fix the JSON syntax and retry."
        ) from error


def _parse_yaml_text(file_path: Path) -> Value:
    try:
        return yaml.safe_load(_read_text(file_path))
    except yaml.YAMLError as error:
        raise HarmoniaInputError(
            f"Failed to parse YAML records at {file_path}: {error}. Fix the YAML syntax and retry."
        ) from error


def _json_default(value: object) -> object:
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
