"""Three-tier normalization of a completion reply into an AnalysisResult."""

import random

from app.analysis.defaults import default_analysis
from app.analysis.extraction import extract_json_candidate, parse_free_text
from app.analysis.models import AnalysisResult, ResultSource, SymptomInput
from app.analysis.validator import validate_and_fix
from app.logging.logger import Log


def normalize(
    raw_text: str,
    symptom_input: SymptomInput,
    rng: random.Random | None = None,
) -> AnalysisResult:
    """Turn raw completion text into a validated AnalysisResult. Never raises."""
    result, _source = normalize_with_source(raw_text, symptom_input, rng=rng)
    return result


def normalize_with_source(
    raw_text: str,
    symptom_input: SymptomInput,
    rng: random.Random | None = None,
) -> tuple[AnalysisResult, ResultSource]:
    """Same as ``normalize`` but also reports which tier produced the result."""
    try:
        candidate = extract_json_candidate(raw_text)
        source = ResultSource.JSON
        if candidate is None:
            Log.warning("No parseable JSON object in completion reply, parsing as text")
            candidate = parse_free_text(raw_text, rng=rng)
            source = ResultSource.TEXT
        result = validate_and_fix(candidate)
    except Exception as exc:
        Log.warning(f"Failed to parse completion reply, using default analysis: {exc}")
        return default_analysis(symptom_input.primary_symptom), ResultSource.DEFAULT

    Log.info(
        f"Normalized completion reply via {source.value} tier: "
        f"{len(result.possible_conditions)} conditions, "
        f"{len(result.recommendations)} recommendations, "
        f"{len(result.medications)} medications"
    )
    return result, source
