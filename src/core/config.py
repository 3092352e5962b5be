"""Runtime configuration model for Harmonia.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_AUDIT_SNAPSHOTS,
    DEFAULT_MERGE_STRATEGY,
    FALSE_ENV_VALUES,
    SUPPORTED_MERGE_STRATEGIES,
    TRUE_ENV_VALUES,
)
from core.errors import HarmoniaConfigError


@dataclass(frozen=True)
class HarmoniaConfig:
    """Validated runtime configuration.

    Attributes:
        default_merge_strategy: Strategy used when a caller does not name one.
        audit_snapshots: Whether harmonize/merge audit entries keep full
            record snapshots or only field names.
    """

    default_merge_strategy: str = DEFAULT_MERGE_STRATEGY
    audit_snapshots: bool = DEFAULT_AUDIT_SNAPSHOTS

    @classmethod
    def from_env(cls) -> "HarmoniaConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            HarmoniaConfigError: If environment values are invalid.
        """
        strategy_value = os.getenv("HARMONIA_DEFAULT_MERGE_STRATEGY", DEFAULT_MERGE_STRATEGY)
        snapshots_value = os.getenv("HARMONIA_AUDIT_SNAPSHOTS")
        return cls(
            default_merge_strategy=_parse_merge_strategy(strategy_value),
            audit_snapshots=_parse_bool(
                "HARMONIA_AUDIT_SNAPSHOTS", snapshots_value, DEFAULT_AUDIT_SNAPSHOTS
            ),
        )


def _parse_merge_strategy(raw_value: str) -> str:
    """Parse the default merge strategy environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Normalized strategy name.

    Raises:
        HarmoniaConfigError: If the strategy is not supported.
    """
    normalized_value = raw_value.strip().lower()
    if normalized_value in SUPPORTED_MERGE_STRATEGIES:
        return normalized_value
    supported_rows = ", ".join(SUPPORTED_MERGE_STRATEGIES)
    raise HarmoniaConfigError(
        "Invalid HARMONIA_DEFAULT_MERGE_STRATEGY value: "
        f"expected one of {supported_rows}, got '{raw_value}'."
    )


def _parse_bool(env_name: str, raw_value: str | None, default_value: bool) -> bool:
    if raw_value is None or not raw_value.strip():
        return default_value
    normalized_value = raw_value.strip().lower()
    if normalized_value in TRUE_ENV_VALUES:
        return True
    if normalized_value in FALSE_ENV_VALUES:
        return False
    raise HarmoniaConfigError(
        f"Invalid {env_name} value: expected true/false, got '{raw_value}'. "
        f"Set {env_name} to one of: {', '.join(TRUE_ENV_VALUES + FALSE_ENV_VALUES)}."
    )
