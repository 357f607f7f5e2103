"""Weekly focus groupings and narrative insight strings.

Everything here derives from the ranked subjects and their plans, never from
the placed schedule: every week lists the same top subjects.
"""

from __future__ import annotations

from collections.abc import Sequence

from study_planner.models import ScoredSubject, SubjectPlan, WeeklyFocus, WeeklyFocusSubject

from .allocator import LOW_CONFIDENCE_MAX
from .rounding import round_half_up

DEFAULT_WEEKLY_FOCUS_SUBJECTS = 2
DEFAULT_WEEKLY_FOCUS_HOURS_SHARE = 0.7
FOCUS_TOPICS_PER_SUBJECT = 2

STUDY_TIPS: tuple[str, ...] = (
    "Schedule high-focus topics during your preferred study time for maximum effectiveness.",
    "Review weak areas from previous weeks before moving to new topics.",
    "Take 5-10 minute breaks every 45-50 minutes to maintain focus and retention.",
    "Use active recall and spaced repetition for better long-term retention.",
    "Adjust your schedule if confidence levels change - track weekly checkpoints.",
)


def _focus_topics(scored: ScoredSubject) -> tuple[str, ...]:
    return scored.subject.study_topics[:FOCUS_TOPICS_PER_SUBJECT]


def focus_priority_label(scored: ScoredSubject) -> str:
    return "High Priority" if scored.subject.confidence_level <= LOW_CONFIDENCE_MAX else "Medium Priority"


def weekly_milestones(top_subject_name: str, week: int) -> tuple[str, ...]:
    # Week numbers are 1-based; the review milestone points at the previous week.
    return (
        f"Complete foundational topics in {top_subject_name}",
        "Start practice problems for weak areas",
        f"Review and consolidate Week {week - 1} concepts",
    )


def build_weekly_focuses(
    ranked_subjects: Sequence[ScoredSubject],
    subject_plans: Sequence[SubjectPlan],
    weeks: int,
    *,
    subjects_per_week: int = DEFAULT_WEEKLY_FOCUS_SUBJECTS,
    hours_share: float = DEFAULT_WEEKLY_FOCUS_HOURS_SHARE,
) -> list[WeeklyFocus]:
    """One entry per week with the top subjects and fixed milestones."""
    top = list(zip(ranked_subjects, subject_plans))[:subjects_per_week]
    if not top or weeks <= 0:
        return []

    entries = tuple(
        WeeklyFocusSubject(
            subject_name=scored.name,
            focus_topics=_focus_topics(scored),
            hours_allocated=round_half_up(plan.total_hours / weeks * hours_share),
            priority=focus_priority_label(scored),
        )
        for scored, plan in top
    )

    return [
        WeeklyFocus(week=week, subjects=entries, key_milestones=weekly_milestones(top[0][0].name, week))
        for week in range(1, weeks + 1)
    ]


def build_next_week_focus(ranked_subjects: Sequence[ScoredSubject]) -> str:
    top = ranked_subjects[0]
    topics = _focus_topics(top)
    label = ", ".join(topics) if topics else top.name
    return f"Next 7 days focus: {label}"


def build_completion_timeline(days_remaining: int, total_available_hours: float) -> str:
    return f"{days_remaining} days remaining | ~{round_half_up(total_available_hours)} total study hours available"


def average_confidence_improvement(subject_plans: Sequence[SubjectPlan]) -> int:
    total = sum(plan.estimated_confidence_improvement for plan in subject_plans)
    return round_half_up(total / len(subject_plans))


def build_confidence_boost(subject_plans: Sequence[SubjectPlan]) -> str:
    return f"Expected confidence improvement: +{average_confidence_improvement(subject_plans)} levels across subjects"
