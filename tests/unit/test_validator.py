"""Tests for validate_and_fix and build_symptom_input."""

import math

import pytest

from app.analysis.exceptions import InvalidSymptomInputError
from app.analysis.models import (
    CONDITION_SEVERITIES,
    RECOMMENDATION_TYPES,
    URGENCY_LEVELS,
    AnalysisResult,
)
from app.analysis.validator import build_symptom_input, validate_and_fix


def _make_candidate() -> dict:
    return {
        "confidence": 85,
        "possibleConditions": [
            {"name": "Migraine", "probability": 60, "description": "Headache", "severity": "high"}
        ],
        "recommendations": [
            {"type": "lifestyle", "title": "Rest", "description": "Sleep", "urgency": "low"}
        ],
        "medications": [
            {
                "name": "Ibuprofen",
                "type": "NSAID",
                "dosage": "200mg",
                "frequency": "Twice daily",
                "duration": "3 days",
                "sideEffects": ["Nausea"],
                "price": "$6",
            }
        ],
        "redFlags": ["Vision loss"],
    }


class TestWellFormedCandidate:
    def test_keeps_values(self) -> None:
        result = validate_and_fix(_make_candidate())

        assert result.confidence == 85
        assert result.possible_conditions[0].name == "Migraine"
        assert result.possible_conditions[0].severity == "high"
        assert result.recommendations[0].type == "lifestyle"
        assert result.medications[0].side_effects == ["Nausea"]
        assert result.red_flags == ["Vision loss"]

    def test_accepts_analysis_result(self) -> None:
        first = validate_and_fix(_make_candidate())
        assert validate_and_fix(first) == first


class TestMalformedCandidate:
    def test_string_confidence_and_non_list_conditions(self) -> None:
        result = validate_and_fix({"confidence": "high", "possibleConditions": "oops"})

        assert result.confidence == 70
        assert len(result.possible_conditions) == 1
        assert result.possible_conditions[0].name == "Unspecified Condition"
        assert result.possible_conditions[0].probability == 60

    @pytest.mark.parametrize("candidate", [None, "text", 42, [1, 2], {"unrelated": True}])
    def test_junk_gets_synthetic_entries(self, candidate: object) -> None:
        result = validate_and_fix(candidate)

        assert result.confidence == 70
        assert result.possible_conditions[0].name == "Unspecified Condition"
        assert result.recommendations[0].title == "Consult healthcare provider"
        assert result.recommendations[0].type == "medical"
        assert result.medications[0].name == "As prescribed by doctor"
        assert result.red_flags == []

    def test_boolean_confidence_is_not_a_number(self) -> None:
        assert validate_and_fix({"confidence": True}).confidence == 70

    def test_non_finite_confidence_defaults(self) -> None:
        assert validate_and_fix({"confidence": math.nan}).confidence == 70
        assert validate_and_fix({"confidence": math.inf}).confidence == 70

    def test_clamps_out_of_range_numbers(self) -> None:
        result = validate_and_fix(
            {
                "confidence": 250,
                "possibleConditions": [{"name": "X", "probability": -5}],
            }
        )
        assert result.confidence == 100
        assert result.possible_conditions[0].probability == 0

    def test_clamps_integers_beyond_float_range(self) -> None:
        result = validate_and_fix(
            {
                "confidence": 10**400,
                "possibleConditions": [{"name": "X", "probability": -(10**400)}],
            }
        )
        assert result.confidence == 100
        assert result.possible_conditions[0].probability == 0


    def test_defaults_item_fields(self) -> None:
        result = validate_and_fix(
            {"possibleConditions": [{}], "recommendations": [7], "medications": [{"name": " "}]}
        )

        condition = result.possible_conditions[0]
        assert (condition.name, condition.probability) == ("Unknown Condition", 50)
        assert condition.description == "No description provided"
        assert condition.severity == "medium"

        recommendation = result.recommendations[0]
        assert recommendation.type == "medical"
        assert recommendation.title == "Medical Recommendation"
        assert recommendation.description == "Follow medical advice"

        medication = result.medications[0]
        assert medication.name == "Recommended Medication"
        assert medication.dosage == "As directed by healthcare provider"
        assert medication.side_effects == ["Consult healthcare provider for side effects"]
        assert medication.price == "Varies"

    def test_coerces_illegal_enum_values(self) -> None:
        result = validate_and_fix(
            {
                "possibleConditions": [{"name": "A", "severity": "critical"}],
                "recommendations": [{"title": "B", "type": "surgery", "urgency": "HIGH"}],
            }
        )
        assert result.possible_conditions[0].severity == "medium"
        assert result.recommendations[0].type == "medical"
        assert result.recommendations[0].urgency == "medium"

    def test_drops_non_string_red_flags(self) -> None:
        result = validate_and_fix({"redFlags": ["Fainting", 3, None, "  ", "Chest pain"]})
        assert result.red_flags == ["Fainting", "Chest pain"]


class TestInvariants:
    @pytest.mark.parametrize(
        "candidate",
        [
            {},
            {"confidence": "high", "possibleConditions": "oops"},
            {"possibleConditions": [{"severity": "extreme"}], "recommendations": [None]},
            _make_candidate(),
        ],
    )
    def test_idempotent(self, candidate: object) -> None:
        once = validate_and_fix(candidate)
        assert validate_and_fix(once) == once

    @pytest.mark.parametrize("candidate", [{}, {"medications": []}, _make_candidate()])
    def test_lists_never_empty_and_enums_closed(self, candidate: object) -> None:
        result = validate_and_fix(candidate)

        assert isinstance(result, AnalysisResult)
        assert result.possible_conditions
        assert result.recommendations
        assert result.medications
        assert all(c.severity in CONDITION_SEVERITIES for c in result.possible_conditions)
        assert all(r.type in RECOMMENDATION_TYPES for r in result.recommendations)
        assert all(r.urgency in URGENCY_LEVELS for r in result.recommendations)
        assert 0 <= result.confidence <= 100


class TestBuildSymptomInput:
    def test_builds_from_record_fields(self) -> None:
        symptom_input = build_symptom_input(
            {
                "primary_symptom": "  Fever ",
                "duration": "less-than-day",
                "severity": "severe",
                "additional_symptoms": ["chills", "", 5],
                "description": None,
                "allergies_context": "Penicillin",
                "medications_context": "   ",
            }
        )
        assert symptom_input.primary_symptom == "Fever"
        assert symptom_input.additional_symptoms == ("chills",)
        assert symptom_input.description == ""
        assert symptom_input.allergies_context == "Penicillin"
        assert symptom_input.medications_context is None

    def test_empty_primary_symptom_raises(self) -> None:
        with pytest.raises(InvalidSymptomInputError, match="primary_symptom"):
            build_symptom_input(
                {"primary_symptom": " ", "duration": "1-3-days", "severity": "mild"}
            )

    def test_unknown_duration_raises(self) -> None:
        with pytest.raises(InvalidSymptomInputError, match="duration"):
            build_symptom_input({"primary_symptom": "a", "duration": "forever", "severity": "mild"})

    def test_unknown_severity_raises(self) -> None:
        with pytest.raises(InvalidSymptomInputError, match="severity"):
            build_symptom_input({"primary_symptom": "a", "duration": "1-3-days", "severity": "bad"})
