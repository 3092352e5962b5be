"""Append-only audit trail for harmonization operations.

Entries are appended under a lock so concurrent callers keep a total
insertion order. Readers always receive deep copies, never live state.
"""

from __future__ import annotations

import copy
from datetime import datetime, timezone
import threading
from typing import Mapping

from core.constants import AUDIT_OPERATIONS
from core.types import AuditEntry, AuditOperation


class AuditLog:
    """Thread-safe, insertion-ordered log of audit entries."""

    def __init__(self) -> None:
        self._entries: list[AuditEntry] = []
        self._lock = threading.Lock()

    def append(self, operation: AuditOperation, details: Mapping[str, object]) -> AuditEntry:
        """Append one entry and return a copy of it.

        Args:
            operation: Harmonizer operation name.
            details: Operation summary; deep-copied on append.

        Returns:
            Snapshot of the appended entry.

        Raises:
            ValueError: If ``operation`` is not a known audit operation.
        """
        if operation not in AUDIT_OPERATIONS:
            raise ValueError(f"Unknown audit operation '{operation}'.")
        details_snapshot = copy.deepcopy(dict(details))
        with self._lock:
            entry = AuditEntry(
                timestamp=datetime.now(timezone.utc),
                operation=operation,
                details=details_snapshot,
            )
            self._entries.append(entry)
        return _copy_entry(entry)

    def entries(self) -> list[AuditEntry]:
        """Return a snapshot of all entries in insertion order."""
        with self._lock:
            current_entries = list(self._entries)
        return [_copy_entry(entry) for entry in current_entries]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def audit_entry_to_payload(entry: AuditEntry) -> dict[str, object]:
    """Convert an audit entry into a JSON-compatible dictionary."""
    return {
        "timestamp": entry.timestamp.isoformat(),
        "operation": entry.operation,
        "details": copy.deepcopy(dict(entry.details)),
    }


def _copy_entry(entry: AuditEntry) -> AuditEntry:
    return AuditEntry(
        timestamp=entry.timestamp,
        operation=entry.operation,
        details=copy.deepcopy(dict(entry.details)),
    )
