"""Two-record merge with conflict resolution strategies."""

from __future__ import annotations

from enum import Enum

from core.constants import (
    MERGE_STRATEGY_LATEST_WINS,
    MERGE_STRATEGY_MANUAL_REVIEW,
    MERGE_STRATEGY_MOST_COMPLETE,
)
from core.values import Value, is_mapping, stringify_value


class MergeStrategy(str, Enum):
    """Conflict resolution strategies for keys present in both records."""

    LATEST_WINS = MERGE_STRATEGY_LATEST_WINS
    MOST_COMPLETE = MERGE_STRATEGY_MOST_COMPLETE
    MANUAL_REVIEW = MERGE_STRATEGY_MANUAL_REVIEW

    @classmethod
    def from_name(cls, name: "str | MergeStrategy") -> "MergeStrategy":
        """Resolve a strategy name; unknown names fall back to manual review."""
        if isinstance(name, MergeStrategy):
            return name
        for strategy in cls:
            if strategy.value == name:
                return strategy
        return cls.MANUAL_REVIEW


def merge_records(left: Value, right: Value, strategy: "str | MergeStrategy") -> Value:
    """Merge ``right`` into a shallow copy of ``left``.

    Keys only in ``right`` are copied as-is; keys in both are resolved by
    ``strategy``. When either input is not a mapping, ``left`` is returned
    unchanged.

    Args:
        left: Base record.
        right: Incoming record.
        strategy: Strategy name or enum member.

    Returns:
        Merged record.
    """
    if not is_mapping(left) or not is_mapping(right):
        return left
    resolved_strategy = MergeStrategy.from_name(strategy)
    merged = dict(left)
    for key, incoming_value in right.items():
        if key in merged:
            merged[key] = resolve_conflict(merged[key], incoming_value, resolved_strategy)
        else:
            merged[key] = incoming_value
    return merged


def resolve_conflict(current: Value, incoming: Value, strategy: MergeStrategy) -> Value:
    """Choose between two values held under the same key."""
    if strategy is MergeStrategy.LATEST_WINS:
        return incoming
    if strategy is MergeStrategy.MOST_COMPLETE:
        return _most_complete(current, incoming)
    # Manual review keeps the existing value until a reviewer decides.
    return current


def _most_complete(current: Value, incoming: Value) -> Value:
    if current is None:
        return incoming
    if incoming is None:
        return current
    if len(stringify_value(incoming)) > len(stringify_value(current)):
        return incoming
    return current
