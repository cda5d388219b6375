from app.analysis.models import AnalysisResult, Condition, Medication, Recommendation

DEFAULT_CONFIDENCE = 65.0


def default_analysis(primary_symptom: str) -> AnalysisResult:
    """Generic advice used when the completion service cannot be relied on."""
    symptom = primary_symptom.strip() or "Unknown symptom"
    title = symptom[0].upper() + symptom[1:]
    lowered = symptom.lower()
    return AnalysisResult(
        confidence=DEFAULT_CONFIDENCE,
        possible_conditions=[
            Condition(
                name=f"{title} - Common Cause",
                probability=70.0,
                description=f"Common cause of {lowered}",
                severity="low",
            ),
            Condition(
                name=f"{title} - Secondary Cause",
                probability=30.0,
                description=f"Less common cause of {lowered}",
                severity="medium",
            ),
        ],
        recommendations=[
            Recommendation(
                type="medication",
                title="Over-the-counter relief",
                description=(
                    "Consider appropriate over-the-counter medication for symptom relief"
                ),
                urgency="medium",
            ),
            Recommendation(
                type="lifestyle",
                title="Rest and hydration",
                description="Ensure adequate rest and stay hydrated",
                urgency="low",
            ),
            Recommendation(
                type="medical",
                title="Consult healthcare provider",
                description=(
                    "If symptoms persist or worsen, consult with a healthcare professional"
                ),
                urgency="medium",
            ),
        ],
        medications=[
            Medication(
                name="Generic Relief Medication",
                type="Symptom reliever",
                dosage="As directed on packaging",
                frequency="As needed",
                duration="Until symptoms improve",
                side_effects=["Varies by medication", "Follow package instructions"],
                price="$5-15",
            )
        ],
        red_flags=[],
    )
