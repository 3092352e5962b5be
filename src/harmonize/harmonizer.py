"""Harmonization orchestration with an audit trail.

The harmonizer owns exactly one piece of mutable state, its audit log.
Rule sets are passed into every call and never retained. Each completed
call appends one audit entry; a call that raises appends nothing.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from core.config import HarmoniaConfig
from core.logging_config import get_logger
from core.types import AuditEntry
from core.values import Value, is_mapping
from harmonize.audit_log import AuditLog
from transforms.deduplication import deduplicate_records
from transforms.field_transform import apply_rule, parse_transformation_rules
from transforms.fingerprint import MatchingRule
from transforms.merge_strategy import MergeStrategy, merge_records

_LOGGER = get_logger(__name__)


class Harmonizer:
    """Transform, deduplicate and merge records while recording an audit log."""

    def __init__(self, config: HarmoniaConfig | None = None) -> None:
        self._config = config or HarmoniaConfig()
        self._audit_log = AuditLog()

    def harmonize(self, record: Value, ruleset: Mapping[str, object]) -> Value:
        """Project a record onto the fields named by a rule set.

        Every ruleset field present in the record is transformed; fields
        without a rule are dropped. Non-mapping records pass through.

        Args:
            record: Input record.
            ruleset: Field name to transformation rule (typed or plain data).

        Returns:
            Harmonized record.
        """
        try:
            rules = parse_transformation_rules(ruleset)
            _LOGGER.info("harmonize_started", rule_fields=list(rules))
            if not is_mapping(record):
                harmonized = record
            else:
                harmonized = {
                    field_name: apply_rule(record[field_name], rule)
                    for field_name, rule in rules.items()
                    if field_name in record
                }
        except Exception:
            _LOGGER.error("harmonize_failed", exc_info=True)
            raise
        self._audit_log.append(
            "harmonize",
            {
                **self._snapshot("input", record),
                **self._snapshot("output", harmonized),
                "passthrough": not is_mapping(record),
            },
        )
        return harmonized

    def deduplicate(
        self,
        records: Iterable[Value],
        matching_rules: Mapping[str, object] | Iterable[MatchingRule],
    ) -> list[Value]:
        """Drop records whose fingerprint was already seen.

        Args:
            records: Records to scan in order.
            matching_rules: Entity name to matching rule (typed or plain data).

        Returns:
            First occurrence of each fingerprint, in input order.
        """
        try:
            input_records = list(records)
            _LOGGER.info("deduplicate_started", record_count=len(input_records))
            unique_records = deduplicate_records(input_records, matching_rules)
        except Exception:
            _LOGGER.error("deduplicate_failed", exc_info=True)
            raise
        self._audit_log.append(
            "deduplicate",
            {"input_count": len(input_records), "output_count": len(unique_records)},
        )
        return unique_records

    def merge(
        self,
        left: Value,
        right: Value,
        strategy: str | MergeStrategy | None = None,
    ) -> Value:
        """Merge two records, resolving shared keys by strategy.

        Args:
            left: Base record; its values win ties and manual review.
            right: Incoming record.
            strategy: Strategy name; defaults to the configured strategy.

        Returns:
            Merged record, or ``left`` unchanged when either input is not
            a mapping.
        """
        if strategy is None:
            strategy = self._config.default_merge_strategy
        strategy_name = _strategy_name(strategy)
        _LOGGER.info("merge_started", strategy=strategy_name)
        try:
            merged = merge_records(left, right, strategy_name)
        except Exception:
            _LOGGER.error("merge_failed", strategy=strategy_name, exc_info=True)
            raise
        self._audit_log.append(
            "merge",
            {
                "strategy": strategy_name,
                **self._snapshot("record1", left),
                **self._snapshot("record2", right),
                **self._snapshot("merged", merged),
            },
        )
        return merged

    def merge_all(
        self,
        records: Iterable[Value],
        strategy: str | MergeStrategy | None = None,
    ) -> Value:
        """Fold records left to right with ``merge``.

        Args:
            records: Records describing the same entity, oldest first.
            strategy: Strategy name; defaults to the configured strategy.

        Returns:
            The combined record, or ``None`` for an empty input.
        """
        merged: Value = None
        for index, record in enumerate(records):
            merged = record if index == 0 else self.merge(merged, record, strategy)
        return merged

    def get_audit_log(self) -> list[AuditEntry]:
        """Return a snapshot of the audit log in insertion order."""
        return self._audit_log.entries()

    def _snapshot(self, label: str, record: Value) -> dict[str, object]:
        if self._config.audit_snapshots:
            return {label: record}
        if is_mapping(record):
            return {f"{label}_fields": [str(key) for key in record]}
        return {f"{label}_fields": []}


def _strategy_name(strategy: str | MergeStrategy) -> str:
    if isinstance(strategy, MergeStrategy):
        return strategy.value
    return strategy
