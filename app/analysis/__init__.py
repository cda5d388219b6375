from app.analysis.analyzer import SymptomAnalyzer
from app.analysis.base import BaseAnalyzer
from app.analysis.factory import AnalyzerFactory
from app.analysis.normalizer import normalize
from app.analysis.validator import validate_and_fix

__all__ = [
    "AnalyzerFactory",
    "BaseAnalyzer",
    "SymptomAnalyzer",
    "normalize",
    "validate_and_fix",
]
