"""Typed rule-spec parsing for declarative harmonization.

This module loads and validates YAML rule-spec files that bundle a record
schema, field transformations, matching rules and a merge strategy. Rule
files are parsed strictly: anything unrecognized is rejected here, before
it can silently degrade into a pass-through at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, cast

import yaml

from core.constants import RULE_SPEC_VERSION, SUPPORTED_MERGE_STRATEGIES
from core.errors import (
    HarmoniaRuleError,
    HarmoniaRuleSpecError,
    HarmoniaSchemaError,
)
from schema.field_spec import Schema
from schema.schema_builder import build_schema
from transforms.field_transform import TransformationRule, parse_transformation_rules
from transforms.fingerprint import MatchingRule, parse_matching_rules

_ALLOWED_ROOT_KEYS = {"version", "schema", "transformations", "matching", "merge_strategy"}


@dataclass(frozen=True)
class RuleSpec:
    """Validated rule-spec root object."""

    version: int
    schema: Schema | None = None
    transformations: Mapping[str, TransformationRule] | None = None
    matching: tuple[MatchingRule, ...] | None = None
    merge_strategy: str | None = None


def load_rule_spec(spec_path: str) -> RuleSpec:
    """Load and validate a YAML rule-spec from disk.

    Args:
        spec_path: File path to YAML rule-spec.

    Returns:
        Fully validated rule-spec object.

    Raises:
        HarmoniaRuleSpecError: If the file is invalid or any section fails checks.
    """
    payload = _load_yaml_payload(spec_path)
    return parse_rule_spec(payload)


def parse_rule_spec(payload: object) -> RuleSpec:
    """Validate an already decoded rule-spec payload.

    Args:
        payload: Decoded YAML/JSON object.

    Returns:
        Fully validated rule-spec object.

    Raises:
        HarmoniaRuleSpecError: If the payload fails schema checks.
    """
    root_mapping = _expect_mapping(payload, "rule spec root")
    _validate_root_keys(root_mapping)
    version = _parse_version(root_mapping)
    try:
        schema = _parse_schema(root_mapping)
        transformations = _parse_transformations(root_mapping)
        matching = _parse_matching(root_mapping)
    except (HarmoniaSchemaError, HarmoniaRuleError) as error:
        raise HarmoniaRuleSpecError(f"Invalid rule spec: {error}") from error
    return RuleSpec(
        version=version,
        schema=schema,
        transformations=transformations,
        matching=matching,
        merge_strategy=_parse_merge_strategy(root_mapping),
    )


def _load_yaml_payload(spec_path: str) -> object:
    spec_file = Path(spec_path).expanduser().resolve()
    if not spec_file.exists():
        raise HarmoniaRuleSpecError(
            f"Rule spec file does not exist at {spec_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(spec_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise HarmoniaRuleSpecError(
            f"Failed to read rule spec at {spec_file}: {error}. Check file permissions and retry."
        ) from error
    except UnicodeDecodeError as error:
        raise HarmoniaRuleSpecError(
            f"Failed to decode rule spec at {spec_file}: {error.reason} at byte {error.start}. "
            "Re-save the file as UTF-8 and retry."
        ) from error
    except yaml.YAMLError as error:
        raise HarmoniaRuleSpecError(
            f"Failed to parse YAML rule spec at {spec_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise HarmoniaRuleSpecError(f"Rule spec at {spec_file} is empty. Define at least 'version'.")
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise HarmoniaRuleSpecError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise HarmoniaRuleSpecError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _parse_version(root_mapping: Mapping[str, object]) -> int:
    raw_version = root_mapping.get("version")
    if isinstance(raw_version, bool) or not isinstance(raw_version, int):
        raise HarmoniaRuleSpecError(
            f"Rule spec field 'version' must be an integer. Set version: {RULE_SPEC_VERSION}."
        )
    if raw_version != RULE_SPEC_VERSION:
        raise HarmoniaRuleSpecError(
            f"Unsupported rule spec version {raw_version}. Use version: {RULE_SPEC_VERSION}."
        )
    return raw_version


def _parse_schema(root_mapping: Mapping[str, object]) -> Schema | None:
    raw_schema = root_mapping.get("schema")
    if raw_schema is None:
        return None
    return build_schema(_expect_mapping(raw_schema, "rule spec schema"))


def _parse_transformations(
    root_mapping: Mapping[str, object],
) -> Mapping[str, TransformationRule] | None:
    raw_rules = root_mapping.get("transformations")
    if raw_rules is None:
        return None
    return parse_transformation_rules(
        _expect_mapping(raw_rules, "rule spec transformations"), strict=True
    )


def _parse_matching(root_mapping: Mapping[str, object]) -> tuple[MatchingRule, ...] | None:
    raw_rules = root_mapping.get("matching")
    if raw_rules is None:
        return None
    return parse_matching_rules(_expect_mapping(raw_rules, "rule spec matching"), strict=True)


def _parse_merge_strategy(root_mapping: Mapping[str, object]) -> str | None:
    raw_strategy = root_mapping.get("merge_strategy")
    if raw_strategy is None:
        return None
    if isinstance(raw_strategy, str) and raw_strategy.strip() in SUPPORTED_MERGE_STRATEGIES:
        return raw_strategy.strip()
    supported_rows = ", ".join(SUPPORTED_MERGE_STRATEGIES)
    raise HarmoniaRuleSpecError(
        f"Unsupported merge_strategy {raw_strategy!r}. Use one of: {supported_rows}."
    )


def _validate_root_keys(root_mapping: Mapping[str, object]) -> None:
    unknown_keys = sorted(set(root_mapping) - _ALLOWED_ROOT_KEYS)
    if unknown_keys:
        raise HarmoniaRuleSpecError(
            f"Rule spec contains unknown root fields: {', '.join(unknown_keys)}."
        )
