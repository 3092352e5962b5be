"""Validate command wiring for Harmonia CLI."""

from __future__ import annotations

import argparse
from typing import Any

from cli.record_io import read_records
from core.errors import HarmoniaRuleSpecError
from core.rule_spec import load_rule_spec
from validation.validator import validate_records


def add_validate_command(subparsers: Any) -> None:
    """Register validate subcommand."""
    parser = subparsers.add_parser(
        "validate",
        help="Validate records against the schema section of a rule spec",
    )
    parser.add_argument("records", help="Record file (.json, .jsonl, .yaml)")
    parser.add_argument("--rules", required=True, help="YAML rule-spec file with a schema")


def run_validate_command(args: argparse.Namespace) -> int:
    """Validate every record and print one row per error."""
    rule_spec = load_rule_spec(args.rules)
    if rule_spec.schema is None:
        raise HarmoniaRuleSpecError(
            f"Rule spec {args.rules} has no 'schema' section. Add one to validate records."
        )
    batch = validate_records(read_records(args.records), rule_spec.schema)
    for invalid_record in batch.invalid:
        for issue in invalid_record.result.errors:
            print(f"{invalid_record.index}\t{issue.field}\t{issue.code.value}\t{issue.message}")
    print(f"valid={len(batch.valid)}\tinvalid={len(batch.invalid)}")
    return 0 if not batch.invalid else 1
