"""Greedy day-by-day task placement.

Phases:
1) queue construction: every subject's hours are cut into fixed-length
   tasks, highest-priority subject first,
2) calendar placement: days are walked from today to the target date and
   up to ``max_tasks_per_day`` tasks are popped per day under its capacity.

Rule preserved: a popped task whose truncated length is at most
``min_task_hours`` is skipped and not requeued, and tasks still queued when
the target date passes are dropped. Task types follow the global queue
position, so they reflect the queue and not the placed schedule.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any

from study_planner.models import AvailabilityData, DailyTask, ScoredSubject, SubjectPlan
from study_planner.reporting.decision_trace import (
    OUTCOME_DROPPED,
    OUTCOME_PLACED,
    OUTCOME_SKIPPED,
    DecisionTraceCollector,
)

from .slot_builder import build_daily_slots

logger = logging.getLogger(__name__)

DEFAULT_TASK_HOURS = 1.5
DEFAULT_MAX_TASKS_PER_DAY = 3
DEFAULT_MIN_TASK_HOURS = 0.5

# Upper bounds on the fraction of a run; anything past the last bound is "low".
PRIORITY_BANDS: tuple[tuple[float, str], ...] = ((0.4, "high"), (0.7, "medium"))
# Upper bounds on the fraction of the global queue; the remainder is "buffer".
PHASE_BANDS: tuple[tuple[float, str], ...] = ((0.4, "learning"), (0.7, "practice"), (0.9, "revision"))


@dataclass(frozen=True, slots=True)
class QueuedTask:
    position: int
    subject: str
    topic: str
    hours: float
    priority: str


@dataclass(frozen=True, slots=True)
class ScheduleResult:
    tasks: tuple[DailyTask, ...]
    queue: tuple[QueuedTask, ...]
    placed_positions: tuple[int, ...]
    skipped_positions: tuple[int, ...]
    dropped_positions: tuple[int, ...]
    slots: tuple[dict[str, Any], ...]


def positional_priority(index: int, run_length: int) -> str:
    """Priority of the ``index``-th task of a subject run of ``run_length`` tasks."""
    for fraction, label in PRIORITY_BANDS:
        if index < math.ceil(run_length * fraction):
            return label
    return "low"


def task_type_for_position(position: int, queue_length: int) -> str:
    progress = position / queue_length
    for fraction, label in PHASE_BANDS:
        if progress < fraction:
            return label
    return "buffer"


def build_task_queue(
    ranked_subjects: Sequence[ScoredSubject],
    subject_plans: Sequence[SubjectPlan],
    *,
    task_hours: float = DEFAULT_TASK_HOURS,
) -> list[QueuedTask]:
    """Concatenate each subject's task run in the given (priority) order.

    ``subject_plans`` must be aligned with ``ranked_subjects``.
    """
    queue: list[QueuedTask] = []
    for scored, plan in zip(ranked_subjects, subject_plans):
        run_length = math.ceil(plan.total_hours / task_hours)
        topics = scored.subject.study_topics
        for index in range(run_length):
            topic = topics[index % len(topics)] if topics else ""
            queue.append(
                QueuedTask(
                    position=len(queue),
                    subject=scored.name,
                    topic=topic or scored.name,
                    hours=task_hours,
                    priority=positional_priority(index, run_length),
                )
            )
    return queue


def place_tasks(
    queue: Sequence[QueuedTask],
    slots: Sequence[dict[str, Any]],
    *,
    max_tasks_per_day: int = DEFAULT_MAX_TASKS_PER_DAY,
    min_task_hours: float = DEFAULT_MIN_TASK_HOURS,
    decision_trace: DecisionTraceCollector | None = None,
) -> ScheduleResult:
    tasks: list[DailyTask] = []
    placed: list[int] = []
    skipped: list[int] = []
    cursor = 0

    for slot in slots:
        if cursor >= len(queue):
            break
        day: date = slot["date"]
        capacity = float(slot["capacity_hours"])
        used = 0.0

        for _ in range(max_tasks_per_day):
            if cursor >= len(queue):
                break
            queued = queue[cursor]
            cursor += 1
            hours = min(queued.hours, capacity - used)

            if hours <= min_task_hours:
                skipped.append(queued.position)
                if decision_trace is not None:
                    decision_trace.record(
                        queue_position=queued.position,
                        day=day,
                        subject=queued.subject,
                        topic=queued.topic,
                        outcome=OUTCOME_SKIPPED,
                        hours=0.0,
                        task_type=None,
                        applied_rules=["RULE_MIN_TASK_HOURS"],
                        capacity_left=capacity - used,
                    )
                continue

            task_type = task_type_for_position(queued.position, len(queue))
            tasks.append(
                DailyTask(
                    date=day,
                    day_of_week=slot["day_of_week"],
                    subject=queued.subject,
                    topic=queued.topic,
                    task_type=task_type,
                    hours=hours,
                    priority=queued.priority,
                    focus_level=queued.priority,
                )
            )
            placed.append(queued.position)
            used += hours
            if decision_trace is not None:
                rules = ["RULE_DAILY_CAPACITY_TRUNCATION"] if hours < queued.hours else []
                decision_trace.record(
                    queue_position=queued.position,
                    day=day,
                    subject=queued.subject,
                    topic=queued.topic,
                    outcome=OUTCOME_PLACED,
                    hours=hours,
                    task_type=task_type,
                    applied_rules=rules,
                    capacity_left=capacity - used,
                )

    dropped = [queued.position for queued in queue[cursor:]]
    if decision_trace is not None:
        for queued in queue[cursor:]:
            decision_trace.record(
                queue_position=queued.position,
                day=None,
                subject=queued.subject,
                topic=queued.topic,
                outcome=OUTCOME_DROPPED,
                hours=0.0,
                task_type=None,
                applied_rules=["RULE_HORIZON_END"],
            )

    if skipped or dropped:
        logger.debug(
            "placed %d of %d queued tasks (%d skipped by truncation, %d dropped at horizon end)",
            len(placed),
            len(queue),
            len(skipped),
            len(dropped),
        )

    return ScheduleResult(
        tasks=tuple(tasks),
        queue=tuple(queue),
        placed_positions=tuple(placed),
        skipped_positions=tuple(skipped),
        dropped_positions=tuple(dropped),
        slots=tuple(slots),
    )


def schedule_tasks(
    ranked_subjects: Sequence[ScoredSubject],
    subject_plans: Sequence[SubjectPlan],
    availability: AvailabilityData,
    *,
    today: date,
    target_date: date,
    task_hours: float = DEFAULT_TASK_HOURS,
    max_tasks_per_day: int = DEFAULT_MAX_TASKS_PER_DAY,
    min_task_hours: float = DEFAULT_MIN_TASK_HOURS,
    decision_trace: DecisionTraceCollector | None = None,
) -> ScheduleResult:
    """Expand subject allocations into dated tasks between today and the target date.

    A target date on or before today leaves the schedule empty.
    """
    queue = build_task_queue(ranked_subjects, subject_plans, task_hours=task_hours)
    slots = (
        build_daily_slots(start_date=today, end_date=target_date, availability=availability)
        if target_date > today
        else []
    )
    return place_tasks(
        queue,
        slots,
        max_tasks_per_day=max_tasks_per_day,
        min_task_hours=min_task_hours,
        decision_trace=decision_trace,
    )
