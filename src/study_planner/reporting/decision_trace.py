"""Decision trace for task placement events."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any

OUTCOME_PLACED = "placed"
OUTCOME_SKIPPED = "skipped_truncated"
OUTCOME_DROPPED = "dropped_horizon"


@dataclass(slots=True)
class DecisionTraceCollector:
    """Collect one record per queue position while the scheduler runs.

    Timestamps are synthetic (start + sequence seconds) so two runs over the
    same inputs produce the same trace.
    """

    start_timestamp: datetime
    _sequence: int = 0
    _items: list[dict[str, Any]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.start_timestamp.tzinfo is None:
            self.start_timestamp = self.start_timestamp.replace(tzinfo=timezone.utc)

    @classmethod
    def for_day(cls, day: date) -> DecisionTraceCollector:
        return cls(start_timestamp=datetime(day.year, day.month, day.day, tzinfo=timezone.utc))

    def record(
        self,
        *,
        queue_position: int,
        day: date | None,
        subject: str,
        topic: str,
        outcome: str,
        hours: float,
        task_type: str | None,
        applied_rules: list[str],
        capacity_left: float | None = None,
    ) -> None:
        self._sequence += 1
        timestamp = self.start_timestamp + timedelta(seconds=self._sequence)
        self._items.append(
            {
                "decision_id": f"d-{self._sequence:06d}",
                "timestamp": timestamp.isoformat().replace("+00:00", "Z"),
                "queue_position": queue_position,
                "date": day.isoformat() if day is not None else None,
                "subject": subject,
                "topic": topic,
                "outcome": outcome,
                "hours": float(hours),
                "task_type": task_type,
                "applied_rules": applied_rules,
                "capacity_left": None if capacity_left is None else float(capacity_left),
            }
        )

    def count(self, outcome: str) -> int:
        return sum(1 for item in self._items if item["outcome"] == outcome)

    def as_list(self) -> list[dict[str, Any]]:
        """Return trace sorted in deterministic chronological order."""
        return sorted(self._items, key=lambda item: (str(item["timestamp"]), str(item["decision_id"])))
