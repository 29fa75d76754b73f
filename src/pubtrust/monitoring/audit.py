"""Thread-safe audit log for selection runs."""

from __future__ import annotations

import json
import logging
import threading
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class AuditKind(str, Enum):
    """Observable events reported during a selection run."""

    EXCLUDED = "excluded"  # Below threshold and outside the top N
    ABUSE_PENALTY = "abuse_penalty"
    AUTOMATION = "automation"  # Matched the automation classifier
    INVALID = "invalid"  # Record violated its invariants
    DUPLICATE = "duplicate"  # User name already seen in this run


# Events that indicate a problem with the input rather than normal filtering
_WARNING_KINDS = {AuditKind.INVALID, AuditKind.DUPLICATE}


@dataclass
class AuditEntry:
    """A single audit event for one contributor."""

    user_name: str
    kind: AuditKind
    message: str
    score: float | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "user_name": self.user_name,
            "kind": self.kind.value,
            "score": self.score,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AuditEntry:
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            user_name=data["user_name"],
            kind=AuditKind(data["kind"]),
            score=data.get("score"),
            message=data.get("message", ""),
        )


class AuditLog:
    """Collects audit events and forwards each one to the logging sink.

    Recording never raises, so one contributor's event cannot interrupt
    scoring of the rest.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[AuditEntry] = []

    def record(
        self,
        user_name: str,
        kind: AuditKind,
        message: str,
        score: float | None = None,
    ) -> AuditEntry:
        """Record an audit event."""
        entry = AuditEntry(user_name=user_name, kind=kind, message=message, score=score)
        with self._lock:
            self._entries.append(entry)

        level = logging.WARNING if kind in _WARNING_KINDS else logging.INFO
        logger.log(level, f"[{kind.value}] {user_name}: {message}")
        return entry

    @property
    def entries(self) -> list[AuditEntry]:
        with self._lock:
            return list(self._entries)

    def by_kind(self, kind: AuditKind) -> list[AuditEntry]:
        """Get all entries of one kind, in recording order."""
        return [e for e in self.entries if e.kind == kind]

    def counts(self) -> dict[str, int]:
        """Number of entries per kind."""
        return dict(Counter(e.kind.value for e in self.entries))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def to_dict(self) -> dict[str, Any]:
        return {
            "counts": self.counts(),
            "entries": [e.to_dict() for e in self.entries],
        }

    def save(self, path: Path) -> None:
        """Write the audit log to a JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Path) -> AuditLog:
        """Read an audit log previously written with save()."""
        with open(path) as f:
            data = json.load(f)
        audit = cls()
        audit._entries = [AuditEntry.from_dict(e) for e in data.get("entries", [])]
        return audit
