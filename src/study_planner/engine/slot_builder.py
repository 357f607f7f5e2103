"""Build daily capacity slots between today and the target date."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

from study_planner.models import AvailabilityData

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _iter_days(start: date, end: date) -> list[date]:
    days: list[date] = []
    cursor = start
    while cursor <= end:
        days.append(cursor)
        cursor += timedelta(days=1)
    return days


def build_daily_slots(*, start_date: date, end_date: date, availability: AvailabilityData) -> list[dict[str, Any]]:
    """Return one slot per calendar day, ascending, both ends inclusive.

    An end date before the start date yields no slots.
    """
    slots: list[dict[str, Any]] = []
    for day in _iter_days(start_date, end_date):
        slots.append(
            {
                "slot_id": f"slot-{day.isoformat()}",
                "date": day,
                "day_of_week": DAY_NAMES[day.weekday()],
                "is_weekend": day.weekday() >= 5,
                "capacity_hours": float(availability.capacity_for(day)),
            }
        )
    return slots
