from abc import ABC, abstractmethod

from app.analysis.models import AnalysisOutcome, SymptomInput


class BaseAnalyzer(ABC):
    """Contract for all symptom analyzers."""

    @abstractmethod
    def analyze(self, symptom_input: SymptomInput) -> AnalysisOutcome:
        """Produce an analysis for one symptom submission.

        Args:
            symptom_input: The patient's submission.

        Returns:
            AnalysisOutcome whose result is always well-formed. Completion
            failures degrade to the default analysis instead of raising.
        """

    def close(self) -> None:
        """Release resources held by the analyzer."""
