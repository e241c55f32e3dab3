"""Content fingerprinting and duplicate detection for site audits."""
from originality.corpus import ContentCorpus
from originality.engine import OriginalityEngine, analyze
from originality.errors import (
    AnalysisTimeout,
    ComputationError,
    ConfigurationError,
    CorpusMismatchError,
    InsufficientContent,
    OriginalityError,
)
from originality.models import CorpusEntry, PageFingerprint
from originality.schemas import (
    EngineConfig,
    OriginalityReport,
    SimilarityClass,
    SimilarityResult,
)

__all__ = [
    "AnalysisTimeout",
    "ComputationError",
    "ConfigurationError",
    "ContentCorpus",
    "CorpusEntry",
    "CorpusMismatchError",
    "EngineConfig",
    "InsufficientContent",
    "OriginalityEngine",
    "OriginalityError",
    "OriginalityReport",
    "PageFingerprint",
    "SimilarityClass",
    "SimilarityResult",
    "analyze",
]
