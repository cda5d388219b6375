from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class JobRecord:
    """Represents a row from the analysis_jobs table."""

    id: int
    symptom_analysis_id: str
    status: str
    attempts: int
    error_message: str | None = None
    locked_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class SymptomAnalysisRecord:
    """Represents a row from the symptom_analyses table."""

    id: str
    user_id: str
    primary_symptom: str
    duration: str
    severity: str
    additional_symptoms: list[str] = field(default_factory=list)
    description: str = ""
    medications_context: str | None = None
    allergies_context: str | None = None
    medical_history_context: str | None = None
    analysis_result: dict[str, Any] | None = None
    confidence_score: float | None = None
    created_at: datetime | None = None
