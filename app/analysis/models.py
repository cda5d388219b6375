from dataclasses import dataclass, field
from enum import Enum

DURATION_BUCKETS = frozenset(
    {"less-than-day", "1-3-days", "4-7-days", "1-2-weeks", "more-than-2-weeks"}
)
SEVERITY_BUCKETS = frozenset({"mild", "moderate", "severe", "very-severe"})

CONDITION_SEVERITIES = frozenset({"low", "medium", "high"})
RECOMMENDATION_TYPES = frozenset({"medication", "lifestyle", "medical"})
URGENCY_LEVELS = frozenset({"low", "medium", "high"})


@dataclass(frozen=True)
class SymptomInput:
    """One patient submission, as collected by the symptom form."""

    primary_symptom: str
    duration: str
    severity: str
    additional_symptoms: tuple[str, ...] = ()
    description: str = ""
    medications_context: str | None = None
    allergies_context: str | None = None
    medical_history_context: str | None = None


@dataclass(frozen=True)
class Condition:
    name: str
    probability: float
    description: str
    severity: str = "medium"


@dataclass(frozen=True)
class Recommendation:
    type: str
    title: str
    description: str
    urgency: str = "medium"


@dataclass(frozen=True)
class Medication:
    name: str
    type: str
    dosage: str
    frequency: str
    duration: str
    side_effects: list[str]
    price: str


@dataclass(frozen=True)
class AnalysisResult:
    """Normalized analysis handed to persistence and the presentation layer.

    ``confidence`` and every ``Condition.probability`` are percentages in [0, 100].
    """

    confidence: float
    possible_conditions: list[Condition] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)
    medications: list[Medication] = field(default_factory=list)
    red_flags: list[str] = field(default_factory=list)

    def to_payload(self) -> dict[str, object]:
        """Serialize to the camelCase JSON shape stored in ``analysis_result``."""
        return {
            "confidence": self.confidence,
            "possibleConditions": [
                {
                    "name": c.name,
                    "probability": c.probability,
                    "description": c.description,
                    "severity": c.severity,
                }
                for c in self.possible_conditions
            ],
            "recommendations": [
                {
                    "type": r.type,
                    "title": r.title,
                    "description": r.description,
                    "urgency": r.urgency,
                }
                for r in self.recommendations
            ],
            "medications": [
                {
                    "name": m.name,
                    "type": m.type,
                    "dosage": m.dosage,
                    "frequency": m.frequency,
                    "duration": m.duration,
                    "sideEffects": list(m.side_effects),
                    "price": m.price,
                }
                for m in self.medications
            ],
            "redFlags": list(self.red_flags),
        }


class ResultSource(str, Enum):
    """Which fallback tier produced an AnalysisResult."""

    JSON = "json"
    TEXT = "text"
    DEFAULT = "default"


@dataclass(frozen=True)
class AnalysisOutcome:
    """Result of one analyzer run, with the data persisted alongside it."""

    result: AnalysisResult
    source: ResultSource
    prompt: str = ""
    raw_response: str = ""
