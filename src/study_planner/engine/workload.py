"""Horizon and available-hours formulas."""

from __future__ import annotations

import math
from datetime import date
from typing import Any

from study_planner.models import AvailabilityData

DEFAULT_WEEKDAYS_PER_WEEK = 5
DEFAULT_WEEKEND_DAYS_PER_WEEK = 2


def compute_study_horizon(
    availability: AvailabilityData,
    *,
    today: date,
    weekdays_per_week: int = DEFAULT_WEEKDAYS_PER_WEEK,
    weekend_days_per_week: int = DEFAULT_WEEKEND_DAYS_PER_WEEK,
) -> dict[str, Any]:
    """Compute days, weeks and total study hours until the target date.

    Formulas:
    - days_remaining = max(0, target_date - today) in whole days
    - weeks_remaining = days_remaining / 7
    - total_available_hours = (weekday_hours * weekdays + weekend_hours * weekend_days) * weeks_remaining
    - weeks = ceil(weeks_remaining)
    """

    days_remaining = max(0, (availability.target_date - today).days)
    weeks_remaining = days_remaining / 7
    total_available_hours = (
        float(availability.weekday_hours) * weekdays_per_week * weeks_remaining
        + float(availability.weekend_hours) * weekend_days_per_week * weeks_remaining
    )

    return {
        "days_remaining": days_remaining,
        "weeks_remaining": weeks_remaining,
        "weeks": math.ceil(weeks_remaining),
        "total_available_hours": total_available_hours,
    }
