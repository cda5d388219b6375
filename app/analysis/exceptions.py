class AnalysisError(Exception):
    """Base error for symptom analysis."""


class CompletionError(AnalysisError):
    """Raised when the completion service returns an unusable reply."""


class CompletionNetworkError(CompletionError):
    """Raised when the completion service call fails due to network/HTTP issues."""


class InvalidSymptomInputError(AnalysisError):
    """Raised when a submission cannot be turned into a SymptomInput."""


class PromptTemplateError(AnalysisError):
    """Raised when the prompt template cannot be loaded or rendered."""
