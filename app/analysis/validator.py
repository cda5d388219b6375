"""Coerces untyped analysis payloads into a well-formed AnalysisResult.

``validate_and_fix`` never raises: every missing or malformed field is replaced
by a fixed default, and empty result lists get one synthetic entry so the
presentation layer always has something to show. Applying it to its own
output returns an equal result.
"""

import math
from collections.abc import Mapping
from typing import Any

from app.analysis.exceptions import InvalidSymptomInputError
from app.analysis.models import (
    CONDITION_SEVERITIES,
    DURATION_BUCKETS,
    RECOMMENDATION_TYPES,
    SEVERITY_BUCKETS,
    URGENCY_LEVELS,
    AnalysisResult,
    Condition,
    Medication,
    Recommendation,
    SymptomInput,
)

_DEFAULT_CONFIDENCE = 70.0
_DEFAULT_PROBABILITY = 50.0
_SIDE_EFFECTS_PLACEHOLDER = "Consult healthcare provider for side effects"


def validate_and_fix(candidate: Any) -> AnalysisResult:
    """Build an AnalysisResult from any candidate value, defaulting field by field."""
    data = _as_mapping(candidate)

    conditions = [_build_condition(item) for item in _as_list(data.get("possibleConditions"))]
    recommendations = [
        _build_recommendation(item) for item in _as_list(data.get("recommendations"))
    ]
    medications = [_build_medication(item) for item in _as_list(data.get("medications"))]
    red_flags = _string_list(data.get("redFlags"))

    if not conditions:
        conditions.append(
            Condition(
                name="Unspecified Condition",
                probability=60.0,
                description=(
                    "Based on the symptoms provided, a specific condition "
                    "could not be determined"
                ),
                severity="medium",
            )
        )
    if not recommendations:
        recommendations.append(
            Recommendation(
                type="medical",
                title="Consult healthcare provider",
                description=(
                    "For accurate diagnosis and treatment, please consult "
                    "with a healthcare professional"
                ),
                urgency="medium",
            )
        )
    if not medications:
        medications.append(
            Medication(
                name="As prescribed by doctor",
                type="Prescription medication",
                dosage="As directed",
                frequency="As directed",
                duration="As directed",
                side_effects=[_SIDE_EFFECTS_PLACEHOLDER],
                price="Varies",
            )
        )

    return AnalysisResult(
        confidence=_percentage(data.get("confidence"), _DEFAULT_CONFIDENCE),
        possible_conditions=conditions,
        recommendations=recommendations,
        medications=medications,
        red_flags=red_flags,
    )


def build_symptom_input(raw: Mapping[str, Any]) -> SymptomInput:
    """Build a SymptomInput from a ``symptom_analyses`` row.

    Raises:
        InvalidSymptomInputError: on an empty primary symptom or an unknown
            duration/severity bucket.
    """
    primary = raw.get("primary_symptom")
    if not isinstance(primary, str) or not primary.strip():
        raise InvalidSymptomInputError("'primary_symptom' must be a non-empty string")
    duration = raw.get("duration")
    if duration not in DURATION_BUCKETS:
        raise InvalidSymptomInputError(
            f"'duration' must be one of {sorted(DURATION_BUCKETS)}, got {duration!r}"
        )
    severity = raw.get("severity")
    if severity not in SEVERITY_BUCKETS:
        raise InvalidSymptomInputError(
            f"'severity' must be one of {sorted(SEVERITY_BUCKETS)}, got {severity!r}"
        )
    description = raw.get("description")
    return SymptomInput(
        primary_symptom=primary.strip(),
        duration=duration,
        severity=severity,
        additional_symptoms=tuple(_string_list(raw.get("additional_symptoms"))),
        description=description if isinstance(description, str) else "",
        medications_context=_optional_text(raw.get("medications_context")),
        allergies_context=_optional_text(raw.get("allergies_context")),
        medical_history_context=_optional_text(raw.get("medical_history_context")),
    )


def _as_mapping(raw: Any) -> Mapping[str, Any]:
    if isinstance(raw, AnalysisResult):
        return raw.to_payload()
    if isinstance(raw, Mapping):
        return raw
    return {}


def _as_list(raw: Any) -> list[Any]:
    return list(raw) if isinstance(raw, list) else []


def _is_number(raw: Any) -> bool:
    # bool is an int subclass but never a meaningful percentage
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return False
    return isinstance(raw, int) or math.isfinite(raw)


def _percentage(raw: Any, default: float) -> float:
    if not _is_number(raw):
        return default
    # clamp before converting: JSON integers can exceed the float range
    return float(max(0, min(100, raw)))



def _text(raw: Any, default: str) -> str:
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    return default


def _choice(raw: Any, allowed: frozenset[str], default: str) -> str:
    return raw if isinstance(raw, str) and raw in allowed else default


def _string_list(raw: Any) -> list[str]:
    if not isinstance(raw, (list, tuple)):
        return []
    return [item.strip() for item in raw if isinstance(item, str) and item.strip()]


def _optional_text(raw: Any) -> str | None:
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    return None


def _build_condition(raw: Any) -> Condition:
    item = _as_mapping(raw)
    return Condition(
        name=_text(item.get("name"), "Unknown Condition"),
        probability=_percentage(item.get("probability"), _DEFAULT_PROBABILITY),
        description=_text(item.get("description"), "No description provided"),
        severity=_choice(item.get("severity"), CONDITION_SEVERITIES, "medium"),
    )


def _build_recommendation(raw: Any) -> Recommendation:
    item = _as_mapping(raw)
    return Recommendation(
        type=_choice(item.get("type"), RECOMMENDATION_TYPES, "medical"),
        title=_text(item.get("title"), "Medical Recommendation"),
        description=_text(item.get("description"), "Follow medical advice"),
        urgency=_choice(item.get("urgency"), URGENCY_LEVELS, "medium"),
    )


def _build_medication(raw: Any) -> Medication:
    item = _as_mapping(raw)
    side_effects = _string_list(item.get("sideEffects")) or [_SIDE_EFFECTS_PLACEHOLDER]
    return Medication(
        name=_text(item.get("name"), "Recommended Medication"),
        type=_text(item.get("type"), "Prescription medication"),
        dosage=_text(item.get("dosage"), "As directed by healthcare provider"),
        frequency=_text(item.get("frequency"), "As needed"),
        duration=_text(item.get("duration"), "As directed"),
        side_effects=side_effects,
        price=_text(item.get("price"), "Varies"),
    )
