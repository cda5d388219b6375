from datetime import datetime, timezone

import pytest

from app.analysis.models import SymptomInput
from app.database.models import SymptomAnalysisRecord


@pytest.fixture()
def headache_input() -> SymptomInput:
    """A fully populated submission for a moderate headache."""
    return SymptomInput(
        primary_symptom="Headache",
        duration="1-3-days",
        severity="moderate",
        additional_symptoms=("nausea", "light sensitivity"),
        description="Throbbing pain behind the eyes",
        medications_context="Ibuprofen occasionally",
        allergies_context=None,
        medical_history_context="Migraines as a teenager",
    )


@pytest.fixture()
def minimal_input() -> SymptomInput:
    """A submission with only the required fields."""
    return SymptomInput(primary_symptom="cough", duration="4-7-days", severity="mild")


@pytest.fixture()
def headache_record() -> SymptomAnalysisRecord:
    return SymptomAnalysisRecord(
        id="0b9a1f6e-3c55-4b7e-9d0a-7f3e5c2d1a00",
        user_id="user-1",
        primary_symptom="Headache",
        duration="1-3-days",
        severity="moderate",
        additional_symptoms=["nausea"],
        description="Throbbing pain",
        created_at=datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc),
    )


@pytest.fixture()
def well_formed_reply() -> str:
    """A completion reply wrapped in a code fence, as chat models often return it."""
    return (
        "Here is the analysis:\n```json\n"
        '{"confidence": 42,'
        ' "possibleConditions": [{"name": "Migraine", "probability": 55,'
        ' "description": "Recurring headache", "severity": "medium"}],'
        ' "recommendations": [{"type": "lifestyle", "title": "Sleep",'
        ' "description": "Keep a regular sleep schedule", "urgency": "low"}],'
        ' "medications": [{"name": "Ibuprofen", "type": "NSAID", "dosage": "200mg",'
        ' "frequency": "Every 6 hours", "duration": "3 days",'
        ' "sideEffects": ["Stomach upset"], "price": "$5"}],'
        ' "redFlags": ["Worst headache of your life"]}'
        "\n```"
    )
