"""Public SDK surface for Harmonia.

This module provides a stable import path for library users.
It re-exports the validator, harmonizer and typed rule models.
"""

from __future__ import annotations

from core.config import HarmoniaConfig
from core.errors import (
    HarmoniaConfigError,
    HarmoniaError,
    HarmoniaInputError,
    HarmoniaRuleError,
    HarmoniaRuleSpecError,
    HarmoniaSchemaError,
)
from core.rule_spec import RuleSpec, load_rule_spec, parse_rule_spec
from core.types import AuditEntry, ValidationCode, ValidationIssue, ValidationResult
from core.values import ValueKind, value_kind
from harmonize.harmonizer import Harmonizer
from schema.field_spec import FieldSpec, Schema
from schema.schema_builder import build_field_spec, build_schema
from transforms.field_transform import (
    MapTransform,
    NamedTransform,
    PassThroughTransform,
    apply_rule,
    parse_transformation_rules,
)
from transforms.fingerprint import MatchingRule, build_fingerprint, parse_matching_rules
from transforms.merge_strategy import MergeStrategy
from validation.validator import SchemaValidator, validate, validate_records

__all__ = [
    "AuditEntry",
    "FieldSpec",
    "Harmonizer",
    "HarmoniaConfig",
    "HarmoniaConfigError",
    "HarmoniaError",
    "HarmoniaInputError",
    "HarmoniaRuleError",
    "HarmoniaRuleSpecError",
    "HarmoniaSchemaError",
    "MapTransform",
    "MatchingRule",
    "MergeStrategy",
    "NamedTransform",
    "PassThroughTransform",
    "RuleSpec",
    "Schema",
    "SchemaValidator",
    "ValidationCode",
    "ValidationIssue",
    "ValidationResult",
    "ValueKind",
    "apply_rule",
    "build_field_spec",
    "build_fingerprint",
    "build_schema",
    "load_rule_spec",
    "parse_matching_rules",
    "parse_rule_spec",
    "parse_transformation_rules",
    "validate",
    "validate_records",
    "value_kind",
]
