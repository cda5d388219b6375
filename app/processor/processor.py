from dataclasses import asdict

import psycopg

from app.analysis.base import BaseAnalyzer
from app.analysis.factory import AnalyzerFactory
from app.analysis.models import AnalysisResult
from app.analysis.validator import build_symptom_input
from app.config.settings import Settings
from app.database.repositories.symptom_analyses_repository import SymptomAnalysesRepository
from app.logging.logger import Log


class Processor:
    """Runs one symptom analysis end to end.

    Pipeline: load -> build input -> analyze -> persist.
    """

    def __init__(
        self,
        analyses_repo: SymptomAnalysesRepository,
        analyzer: BaseAnalyzer,
    ) -> None:
        self._analyses_repo = analyses_repo
        self._analyzer = analyzer

    def process(self, symptom_analysis_id: str, job_id: int) -> AnalysisResult:
        """Analyze a stored submission and persist the normalized result.

        Raises:
            AnalysisNotFoundError: if the submission does not exist.
            InvalidSymptomInputError: if the stored submission is unusable.
        """
        Log.info(f"Processing analysis {symptom_analysis_id} for job {job_id}")

        record = self._analyses_repo.find_by_id(symptom_analysis_id)
        symptom_input = build_symptom_input(asdict(record))

        outcome = self._analyzer.analyze(symptom_input)
        Log.info(
            f"Analyzed {symptom_analysis_id}",
            source=outcome.source.value,
            confidence=f"{outcome.result.confidence:g}",
            conditions=len(outcome.result.possible_conditions),
        )

        try:
            self._analyses_repo.save_result(symptom_analysis_id, outcome)
        except psycopg.Error as exc:
            Log.warning(f"Failed to persist analysis {symptom_analysis_id}: {exc}")

        return outcome.result

    def close(self) -> None:
        """Close the analyzer and its completion client."""
        self._analyzer.close()


def build_processor(settings: Settings) -> Processor:
    """Build a Processor with the configured analyzer."""
    return Processor(
        analyses_repo=SymptomAnalysesRepository(),
        analyzer=AnalyzerFactory.create(settings),
    )
