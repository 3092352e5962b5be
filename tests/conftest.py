"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _clear_harmonia_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests independent of the caller's HARMONIA_* environment."""
    monkeypatch.delenv("HARMONIA_DEFAULT_MERGE_STRATEGY", raising=False)
    monkeypatch.delenv("HARMONIA_AUDIT_SNAPSHOTS", raising=False)


@pytest.fixture
def patient_schema_payload() -> dict[str, object]:
    """Plain schema data describing a nested patient record."""
    return {
        "patientId": {"kind": "string", "required": True, "pattern": r"^P\d+$"},
        "age": {"kind": "number", "required": True, "min": 0, "max": 150},
        "status": {"kind": "string", "allowedValues": ["active", "withdrawn"]},
        "ids": {"kind": "sequence", "itemSpec": {"kind": "string", "minLength": 1}},
        "demographics": {
            "kind": "mapping",
            "propertySpecs": {
                "sex": {"kind": "string", "required": True},
                "age": {"kind": "number", "min": 0},
            },
        },
    }
