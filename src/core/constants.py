"""Core constants used across Harmonia modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

FINGERPRINT_SEPARATOR = "|"
ROOT_FIELD_PATH = "root"
RULE_SPEC_VERSION = 1
MERGE_STRATEGY_LATEST_WINS = "latest-wins"
MERGE_STRATEGY_MOST_COMPLETE = "most-complete"
MERGE_STRATEGY_MANUAL_REVIEW = "manual-review"
SUPPORTED_MERGE_STRATEGIES = (
    MERGE_STRATEGY_LATEST_WINS,
    MERGE_STRATEGY_MOST_COMPLETE,
    MERGE_STRATEGY_MANUAL_REVIEW,
)
DEFAULT_MERGE_STRATEGY = MERGE_STRATEGY_MANUAL_REVIEW
DEFAULT_AUDIT_SNAPSHOTS = True
SUPPORTED_NAMED_TRANSFORMS = ("uppercase", "lowercase", "trim")
MAP_TRANSFORM_KIND = "map"
AUDIT_OPERATIONS = ("harmonize", "deduplicate", "merge")
SUPPORTED_RECORD_EXTENSIONS = (".json", ".jsonl", ".yaml", ".yml")
TRUE_ENV_VALUES = ("1", "true", "yes", "on")
FALSE_ENV_VALUES = ("0", "false", "no", "off")
