"""Fingerprint-based record deduplication transform.

This module keeps the first record seen for each fingerprint and drops
later ones, preserving the order of survivors. Running it again on its own
output with the same rules returns the same sequence.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from core.values import Value, is_mapping
from transforms.fingerprint import MatchingRule, build_fingerprint, parse_matching_rules


def deduplicate_records(
    records: Iterable[Value],
    matching_rules: Mapping[str, object] | Iterable[MatchingRule],
) -> list[Value]:
    """Remove records whose fingerprint was already seen.

    Args:
        records: Records to scan left to right.
        matching_rules: Typed rules or plain matching-rule data.

    Returns:
        Ordered records with duplicates removed. Non-mapping elements are
        always kept since they cannot be fingerprinted.
    """
    rules = parse_matching_rules(matching_rules)
    unique_records: list[Value] = []
    seen_fingerprints: set[str] = set()
    for record in records:
        if not is_mapping(record):
            unique_records.append(record)
            continue
        fingerprint = build_fingerprint(record, rules)
        if fingerprint in seen_fingerprints:
            continue
        seen_fingerprints.add(fingerprint)
        unique_records.append(record)
    return unique_records
