"""repo-insight - rule-based scoring and career insights for GitHub repositories."""

__version__ = "0.3.0"

from .analyzer import Analyzer, analyze
from .models import AnalysisResult
from .snapshot import InvalidSnapshot, RepositorySnapshot

__all__ = [
    "AnalysisResult",
    "Analyzer",
    "InvalidSnapshot",
    "RepositorySnapshot",
    "__version__",
    "analyze",
]
