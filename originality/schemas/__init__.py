from originality.schemas.engine_config import EngineConfig, PenaltyMode
from originality.schemas.report import (
    DuplicateDetection,
    OriginalityReport,
    Recommendation,
    SimilarityClass,
    SimilarityResult,
    UniquenessAnalysis,
)

__all__ = [
    "DuplicateDetection",
    "EngineConfig",
    "OriginalityReport",
    "PenaltyMode",
    "Recommendation",
    "SimilarityClass",
    "SimilarityResult",
    "UniquenessAnalysis",
]
