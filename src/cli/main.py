"""Harmonia CLI entry points.

This module exposes validate, harmonize, deduplicate and merge commands.
It maps argparse commands onto library calls over record files.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Sequence

from cli.record_io import read_records, read_single_record, render_json_line, render_json_lines
from cli.validate_command import add_validate_command, run_validate_command
from core.config import HarmoniaConfig
from core.constants import SUPPORTED_MERGE_STRATEGIES
from core.errors import HarmoniaError, HarmoniaRuleSpecError
from core.rule_spec import RuleSpec, load_rule_spec
from harmonize.audit_log import audit_entry_to_payload
from harmonize.harmonizer import Harmonizer


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="harmonia", description="Validate and harmonize multi-source records"
    )
    parser.add_argument(
        "--audit",
        action="store_true",
        help="Print the harmonization audit log as JSON lines on stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_validate_command(subparsers)
    _add_harmonize_command(subparsers)
    _add_deduplicate_command(subparsers)
    _add_merge_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Harmonia CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        harmonizer = Harmonizer(HarmoniaConfig.from_env())
        exit_code = _dispatch(parser, harmonizer, args)
    except HarmoniaError as error:
        print(f"harmonia_error={error}", file=sys.stderr)
        return 1
    if args.audit:
        _print_audit_log(harmonizer)
    return exit_code


def _dispatch(
    parser: argparse.ArgumentParser,
    harmonizer: Harmonizer,
    args: argparse.Namespace,
) -> int:
    if args.command == "validate":
        return run_validate_command(args)
    if args.command == "harmonize":
        return _run_harmonize_command(harmonizer, args)
    if args.command == "deduplicate":
        return _run_deduplicate_command(harmonizer, args)
    if args.command == "merge":
        return _run_merge_command(harmonizer, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _add_harmonize_command(subparsers: Any) -> None:
    parser = subparsers.add_parser(
        "harmonize",
        help="Project records onto the transformations section of a rule spec",
    )
    parser.add_argument("records", help="Record file (.json, .jsonl, .yaml)")
    parser.add_argument("--rules", required=True, help="YAML rule-spec file")


def _add_deduplicate_command(subparsers: Any) -> None:
    parser = subparsers.add_parser(
        "deduplicate",
        help="Drop duplicate records using the matching section of a rule spec",
    )
    parser.add_argument("records", help="Record file (.json, .jsonl, .yaml)")
    parser.add_argument("--rules", required=True, help="YAML rule-spec file")


def _add_merge_command(subparsers: Any) -> None:
    parser = subparsers.add_parser("merge", help="Merge two records into one")
    parser.add_argument("left", help="File holding the base record")
    parser.add_argument("right", help="File holding the incoming record")
    parser.add_argument(
        "--strategy",
        choices=SUPPORTED_MERGE_STRATEGIES,
        help="Conflict strategy; overrides the rule spec and environment default",
    )
    parser.add_argument("--rules", help="Optional YAML rule-spec file with merge_strategy")


def _run_harmonize_command(harmonizer: Harmonizer, args: argparse.Namespace) -> int:
    """Handle harmonize command.

    Args:
        harmonizer: Harmonizer collecting the audit log.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    rule_spec = load_rule_spec(args.rules)
    if rule_spec.transformations is None:
        raise HarmoniaRuleSpecError(
            f"Rule spec {args.rules} has no 'transformations' section."
        )
    harmonized = [
        harmonizer.harmonize(record, rule_spec.transformations)
        for record in read_records(args.records)
    ]
    _print_records(harmonized)
    return 0


def _run_deduplicate_command(harmonizer: Harmonizer, args: argparse.Namespace) -> int:
    """Handle deduplicate command.

    Args:
        harmonizer: Harmonizer collecting the audit log.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    rule_spec = load_rule_spec(args.rules)
    if rule_spec.matching is None:
        raise HarmoniaRuleSpecError(f"Rule spec {args.rules} has no 'matching' section.")
    _print_records(harmonizer.deduplicate(read_records(args.records), rule_spec.matching))
    return 0


def _run_merge_command(harmonizer: Harmonizer, args: argparse.Namespace) -> int:
    """Handle merge command.

    Args:
        harmonizer: Harmonizer collecting the audit log.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    rule_spec = load_rule_spec(args.rules) if args.rules else None
    strategy = args.strategy or _rule_spec_strategy(rule_spec)
    left = read_single_record(args.left)
    right = read_single_record(args.right)
    print(render_json_line(harmonizer.merge(left, right, strategy)))
    return 0


def _rule_spec_strategy(rule_spec: RuleSpec | None) -> str | None:
    if rule_spec is None:
        return None
    return rule_spec.merge_strategy


def _print_records(records: list[Any]) -> None:
    if records:
        print(render_json_lines(records))


def _print_audit_log(harmonizer: Harmonizer) -> None:
    for entry in harmonizer.get_audit_log():
        payload = audit_entry_to_payload(entry)
        print(json.dumps(payload, ensure_ascii=False, default=str), file=sys.stderr)
