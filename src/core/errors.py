"""Harmonia exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Data problems in records are never raised; they are reported through
validation results. These errors signal bad definitions or bad inputs
to the outer layers.
"""

from __future__ import annotations


class HarmoniaError(Exception):
    """Base exception for all Harmonia failures."""


class HarmoniaConfigError(HarmoniaError):
    """Raised for invalid runtime configuration."""


class HarmoniaSchemaError(HarmoniaError):
    """Raised when a schema definition is malformed."""


class HarmoniaRuleError(HarmoniaError):
    """Raised when a transformation or matching rule definition is malformed."""


class HarmoniaRuleSpecError(HarmoniaError):
    """Raised for invalid or unsupported rule-spec files."""


class HarmoniaInputError(HarmoniaError):
    """Raised when record input files cannot be read or parsed."""
