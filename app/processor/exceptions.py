class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class AnalysisNotFoundError(ProcessorError):
    """Raised when a symptom analysis cannot be found in the database."""
