"""Immutable request and plan value objects.

Every object is created fresh by one engine invocation and never mutated.
``as_dict`` returns the JSON-ready mapping with the camelCase field names
used by the wizard and the plan renderer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Literal

TaskType = Literal["learning", "practice", "revision", "buffer"]
Level = Literal["high", "medium", "low"]

TASK_TYPES: tuple[str, ...] = ("learning", "practice", "revision", "buffer")


@dataclass(frozen=True, slots=True)
class StudentData:
    """Student details, carried through for display only."""

    name: str
    college: str = ""
    branch: str = ""
    graduation_year: int | None = None
    email: str = ""

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "college": self.college,
            "branch": self.branch,
            "graduationYear": self.graduation_year,
            "email": self.email,
        }


@dataclass(frozen=True, slots=True)
class Subject:
    """One subject as reported by the student.

    Topic lists are already split on commas and trimmed.
    """

    id: str
    name: str
    credits: int
    confidence_level: int
    strong_areas: tuple[str, ...] = ()
    weak_areas: tuple[str, ...] = ()

    @property
    def study_topics(self) -> tuple[str, ...]:
        """Topics cycled by scheduled tasks: weak areas, else strong areas."""
        return self.weak_areas if self.weak_areas else self.strong_areas

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "credits": self.credits,
            "confidenceLevel": self.confidence_level,
            "strongAreas": ", ".join(self.strong_areas),
            "weakAreas": ", ".join(self.weak_areas),
        }


@dataclass(frozen=True, slots=True)
class AvailabilityData:
    weekday_hours: float
    weekend_hours: float
    target_date: date
    preferred_time: str = "night"

    def capacity_for(self, day: date) -> float:
        """Daily study capacity: weekend hours on Saturday/Sunday."""
        return self.weekend_hours if day.weekday() >= 5 else self.weekday_hours

    def as_dict(self) -> dict[str, Any]:
        return {
            "weekdayHours": self.weekday_hours,
            "weekendHours": self.weekend_hours,
            "preferredTime": self.preferred_time,
            "targetDate": self.target_date.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class PlanRequest:
    student: StudentData
    subjects: tuple[Subject, ...]
    availability: AvailabilityData


@dataclass(frozen=True, slots=True)
class ScoredSubject:
    subject: Subject
    priority_score: float
    cognitive_level_index: int

    @property
    def name(self) -> str:
        return self.subject.name


@dataclass(frozen=True, slots=True)
class SubjectPlan:
    subject_name: str
    total_hours: int
    percentage_allocation: int
    allocation: str
    key_topics: tuple[str, ...]
    weekly_breakdown: tuple[int, ...]
    estimated_confidence_improvement: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "subjectName": self.subject_name,
            "totalHours": self.total_hours,
            "percentageAllocation": self.percentage_allocation,
            "allocation": self.allocation,
            "keyTopics": list(self.key_topics),
            "weeklyBreakdown": list(self.weekly_breakdown),
            "estimatedConfidenceImprovement": self.estimated_confidence_improvement,
        }


@dataclass(frozen=True, slots=True)
class DailyTask:
    date: date
    day_of_week: str
    subject: str
    topic: str
    task_type: TaskType
    hours: float
    priority: Level
    focus_level: Level

    def as_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "dayOfWeek": self.day_of_week,
            "subject": self.subject,
            "topic": self.topic,
            "taskType": self.task_type,
            "hours": float(self.hours),
            "priority": self.priority,
            "focusLevel": self.focus_level,
        }


@dataclass(frozen=True, slots=True)
class WeeklyFocusSubject:
    subject_name: str
    focus_topics: tuple[str, ...]
    hours_allocated: int
    priority: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "subjectName": self.subject_name,
            "focusTopics": list(self.focus_topics),
            "hoursAllocated": self.hours_allocated,
            "priority": self.priority,
        }


@dataclass(frozen=True, slots=True)
class WeeklyFocus:
    week: int
    subjects: tuple[WeeklyFocusSubject, ...]
    key_milestones: tuple[str, ...]

    def as_dict(self) -> dict[str, Any]:
        return {
            "week": self.week,
            "subjects": [item.as_dict() for item in self.subjects],
            "keyMilestones": list(self.key_milestones),
        }


@dataclass(frozen=True, slots=True)
class StudyPlan:
    """Aggregate returned by the engine; consumers only read it."""

    student_name: str
    target_date: date
    days_remaining: int
    total_available_hours: int
    schedule: tuple[DailyTask, ...]
    weekly_focuses: tuple[WeeklyFocus, ...]
    subject_plans: tuple[SubjectPlan, ...]
    next_week_focus: str
    completion_timeline: str
    confidence_boost: str
    tips: tuple[str, ...]

    def as_dict(self) -> dict[str, Any]:
        return {
            "studentName": self.student_name,
            "targetDate": self.target_date.isoformat(),
            "daysRemaining": self.days_remaining,
            "totalAvailableHours": self.total_available_hours,
            "schedule": [task.as_dict() for task in self.schedule],
            "weeklyFocuses": [focus.as_dict() for focus in self.weekly_focuses],
            "subjectPlans": [plan.as_dict() for plan in self.subject_plans],
            "nextWeekFocus": self.next_week_focus,
            "completionTimeline": self.completion_timeline,
            "confidenceBoost": self.confidence_boost,
            "tips": list(self.tips),
        }
