"""Subject priority scoring and deterministic ranking."""

from __future__ import annotations

from collections.abc import Iterable

from study_planner.models import ScoredSubject, Subject

DEFAULT_SCORE_WEIGHTS: dict[str, float] = {
    "w_confidence": 0.4,
    "w_credits": 0.4,
    "w_weak_areas": 0.2,
}

MAX_CONFIDENCE_LEVEL = 5
MAX_CREDITS = 8
WEAK_AREA_BONUS = 0.3


def compute_score(
    features: dict[str, float],
    weights: dict[str, float] | None = None,
) -> float:
    """Compute the weighted priority formula from normalized features."""

    w = DEFAULT_SCORE_WEIGHTS if weights is None else weights
    return (
        float(w.get("w_confidence", 0.0)) * float(features.get("confidence_gap", 0.0))
        + float(w.get("w_credits", 0.0)) * float(features.get("credit_load", 0.0))
        + float(w.get("w_weak_areas", 0.0)) * float(features.get("weak_area_bonus", 0.0))
    )


def subject_features(subject: Subject) -> dict[str, float]:
    return {
        "confidence_gap": (MAX_CONFIDENCE_LEVEL - subject.confidence_level) / MAX_CONFIDENCE_LEVEL,
        "credit_load": subject.credits / MAX_CREDITS,
        "weak_area_bonus": WEAK_AREA_BONUS if subject.weak_areas else 0.0,
    }


def cognitive_level_index(confidence_level: int) -> int:
    """Bucket confidence: 0 for 1-2, 1 for 3, 2 for 4-5."""
    if confidence_level <= 2:
        return 0
    if confidence_level <= 3:
        return 1
    return 2


def score_subject(subject: Subject, weights: dict[str, float] | None = None) -> tuple[float, int]:
    """Return ``(priority_score, cognitive_level_index)`` for one subject.

    The score lies in [0, 1] for credits in 1-8 and confidence in 1-5.
    """
    return compute_score(subject_features(subject), weights), cognitive_level_index(subject.confidence_level)


def score_subjects(
    subjects: Iterable[Subject],
    weights: dict[str, float] | None = None,
) -> list[ScoredSubject]:
    scored: list[ScoredSubject] = []
    for subject in subjects:
        priority_score, level = score_subject(subject, weights)
        scored.append(ScoredSubject(subject=subject, priority_score=priority_score, cognitive_level_index=level))
    return scored


def priority_sort_key(scored: ScoredSubject) -> float:
    return -scored.priority_score


def rank_subjects(scored_subjects: Iterable[ScoredSubject]) -> list[ScoredSubject]:
    """Sort by descending score; equal scores keep their input order."""
    return sorted(scored_subjects, key=priority_sort_key)
