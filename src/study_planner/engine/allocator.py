"""Proportional hour allocation across subjects and weeks.

Each subject receives a share of the total available hours proportional to
its priority score. Per-subject hours are spread over the remaining weeks on
a front-loaded curve that tapers by at most ``weekly_taper`` in the last week.
Rounded values are reported as is: percentages may drift from 100 and weekly
breakdowns may not add up to the subject total.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from study_planner.models import ScoredSubject, Subject, SubjectPlan

from .rounding import round_half_up
from .scoring import MAX_CONFIDENCE_LEVEL, rank_subjects

DEFAULT_WEEKLY_TAPER = 0.2
DEFAULT_CONFIDENCE_HOURS_SCALE = 50.0
MAX_KEY_TOPICS = 3
LOW_CONFIDENCE_MAX = 2
HIGH_CREDITS_MIN = 4

# Keyed by (low confidence, high credits).
ALLOCATION_RATIONALES: dict[tuple[bool, bool], str] = {
    (True, True): (
        "High priority: Low confidence + High credits. "
        "Intensive focus on foundational concepts and weak areas."
    ),
    (True, False): "Medium-high priority: Low confidence. Focus on understanding weak topics thoroughly.",
    (False, True): "Medium priority: Higher credits require more time. Balanced learning and practice approach.",
    (False, False): "Medium-low priority: Good confidence, lighter load to consolidate understanding.",
}


def allocation_rationale(subject: Subject) -> str:
    low_confidence = subject.confidence_level <= LOW_CONFIDENCE_MAX
    high_credits = subject.credits >= HIGH_CREDITS_MIN
    return ALLOCATION_RATIONALES[(low_confidence, high_credits)]


def select_key_topics(subject: Subject, limit: int = MAX_KEY_TOPICS) -> tuple[str, ...]:
    """Weak-area topics first, topped up with strong-area topics."""
    topics = list(subject.weak_areas)
    if len(topics) < limit:
        topics.extend(subject.strong_areas[: limit - len(topics)])
    return tuple(topics[:limit])


def weekly_breakdown(
    allocated_hours: float,
    weeks: int,
    *,
    weekly_taper: float = DEFAULT_WEEKLY_TAPER,
) -> tuple[int, ...]:
    if weeks <= 0:
        return ()
    weekly_hours = allocated_hours / weeks
    return tuple(round_half_up(weekly_hours * (1 - (week / weeks) * weekly_taper)) for week in range(weeks))


def estimate_confidence_improvement(
    confidence_level: int,
    allocated_hours: float,
    *,
    confidence_hours_scale: float = DEFAULT_CONFIDENCE_HOURS_SCALE,
) -> int:
    """Levels gained, capped by the room left below the top confidence level."""
    potential = max(0, MAX_CONFIDENCE_LEVEL - confidence_level)
    scaled = round_half_up(potential * (allocated_hours / confidence_hours_scale))
    return max(0, min(potential, scaled))


def allocate_hours(
    scored_subjects: Sequence[ScoredSubject],
    total_available_hours: float,
    weeks_remaining: float,
    *,
    weekly_taper: float = DEFAULT_WEEKLY_TAPER,
    confidence_hours_scale: float = DEFAULT_CONFIDENCE_HOURS_SCALE,
) -> list[SubjectPlan]:
    """Return one plan per subject, highest priority first.

    Requires at least one subject: the percentage split divides by the sum
    of all priority scores.
    """

    if not scored_subjects:
        raise ValueError("allocate_hours requires at least one subject")

    ranked = rank_subjects(scored_subjects)
    score_total = sum(item.priority_score for item in ranked)
    weeks = math.ceil(weeks_remaining)

    plans: list[SubjectPlan] = []
    for item in ranked:
        percentage = item.priority_score / score_total * 100
        allocated_hours = percentage / 100 * total_available_hours
        plans.append(
            SubjectPlan(
                subject_name=item.name,
                total_hours=round_half_up(allocated_hours),
                percentage_allocation=round_half_up(percentage),
                allocation=allocation_rationale(item.subject),
                key_topics=select_key_topics(item.subject),
                weekly_breakdown=weekly_breakdown(allocated_hours, weeks, weekly_taper=weekly_taper),
                estimated_confidence_improvement=estimate_confidence_improvement(
                    item.subject.confidence_level,
                    allocated_hours,
                    confidence_hours_scale=confidence_hours_scale,
                ),
            )
        )
    return plans
