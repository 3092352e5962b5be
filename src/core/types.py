"""Shared typed models.

This module defines immutable result models used by the validation,
harmonization and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Literal, Mapping

AuditOperation = Literal["harmonize", "deduplicate", "merge"]


class ValidationCode(str, Enum):
    """Stable error code taxonomy for record validation."""

    REQUIRED_FIELD = "REQUIRED_FIELD"
    INVALID_TYPE = "INVALID_TYPE"
    MIN_LENGTH = "MIN_LENGTH"
    MAX_LENGTH = "MAX_LENGTH"
    PATTERN_MISMATCH = "PATTERN_MISMATCH"
    MIN_VALUE = "MIN_VALUE"
    MAX_VALUE = "MAX_VALUE"
    INVALID_DATE = "INVALID_DATE"
    INVALID_VALUE = "INVALID_VALUE"


@dataclass(frozen=True)
class ValidationIssue:
    """One validation error or warning.

    Attributes:
        field: Dotted/bracketed path of the offending location.
        message: Human readable description.
        code: Stable machine readable code.
    """

    field: str
    message: str
    code: ValidationCode


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one record against a schema.

    Attributes:
        errors: Ordered errors; any error makes the record invalid.
        warnings: Ordered warnings; never affect validity.
    """

    errors: tuple[ValidationIssue, ...] = ()
    warnings: tuple[ValidationIssue, ...] = ()

    @property
    def is_valid(self) -> bool:
        """Return whether the record produced no errors."""
        return len(self.errors) == 0

    def error_codes(self) -> tuple[ValidationCode, ...]:
        """Return error codes in report order."""
        return tuple(issue.code for issue in self.errors)


@dataclass(frozen=True)
class AuditEntry:
    """One append-only harmonization audit row.

    Attributes:
        timestamp: UTC time the operation completed.
        operation: Harmonizer operation name.
        details: Operation-specific summary.
    """

    timestamp: datetime
    operation: AuditOperation
    details: Mapping[str, object] = field(default_factory=dict)
