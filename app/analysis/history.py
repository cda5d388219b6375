"""Dashboard summary over a user's past symptom analyses."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta

from app.database.models import SymptomAnalysisRecord

BASE_SCORE = 70
SEVERE_PENALTY = 5
CHECKUP_BONUS = 3
MAX_CHECKUP_BONUS = 15
CHECKUP_INTERVAL_DAYS = 30
_SEVERE = frozenset({"severe", "very-severe"})


@dataclass(frozen=True)
class Reminder:
    title: str
    description: str
    due_in: str
    type: str = "upcoming"


@dataclass(frozen=True)
class HealthSummary:
    health_score: int
    next_checkup_days: int
    active_symptoms: int
    reminders: list[Reminder] = field(default_factory=list)


def summarize_history(
    analyses: Sequence[SymptomAnalysisRecord],
    today: date,
) -> HealthSummary:
    """Score a user's analysis history and derive follow-up reminders.

    Severe submissions lower the score; regular check-ins raise it up to a cap.
    The next checkup is due a fixed interval after the newest analysis.
    """
    if not analyses:
        return HealthSummary(
            health_score=0,
            next_checkup_days=CHECKUP_INTERVAL_DAYS,
            active_symptoms=0,
        )

    severe_count = sum(1 for a in analyses if a.severity in _SEVERE)
    score = BASE_SCORE - severe_count * SEVERE_PENALTY
    score += min(len(analyses) * CHECKUP_BONUS, MAX_CHECKUP_BONUS)
    score = max(0, min(100, score))

    dated = [(a.created_at, a) for a in analyses if a.created_at is not None]
    next_checkup_days = CHECKUP_INTERVAL_DAYS
    if dated:
        created_at, latest = max(dated, key=lambda pair: pair[0])
        due = created_at.date() + timedelta(days=CHECKUP_INTERVAL_DAYS)
        next_checkup_days = max(0, (due - today).days)
    else:
        latest = analyses[0]

    reminders = []
    if latest.severity in _SEVERE:
        reminders.append(
            Reminder(
                title="Follow-up Recommended",
                description=f"Follow up on your {latest.primary_symptom} symptoms",
                due_in="7 days",
            )
        )

    return HealthSummary(
        health_score=score,
        next_checkup_days=next_checkup_days,
        active_symptoms=len({a.primary_symptom for a in analyses}),
        reminders=reminders,
    )
