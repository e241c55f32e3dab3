from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class SimilarityClass(str, enum.Enum):
    EXACT = "exact"
    NEAR = "near"
    RELATED = "related"
    DISTINCT = "distinct"


class SimilarityResult(BaseModel):
    other_url: str
    similarity: float = Field(ge=0.0, le=1.0)
    classification: SimilarityClass
    matched_segments: List[str] = Field(default_factory=list)


class UniquenessAnalysis(BaseModel):
    """Intrinsic diversity of a page, independent of the corpus."""

    lexical_diversity: float = 0.0
    structural_diversity: float = 0.0
    pattern_diversity: float = 0.0
    lexical_category: str = "very-low"
    total_words: int = 0
    unique_words: int = 0
    sentence_count: int = 0
    avg_sentence_length: float = 0.0
    sentence_length_variance: float = 0.0
    signals: Dict[str, float] = Field(default_factory=dict)
    uniqueness_score: int = Field(default=50, ge=0, le=100)
    uniqueness_level: str = "poor"


class DuplicateDetection(BaseModel):
    exact_duplicates: List[SimilarityResult] = Field(default_factory=list)
    near_duplicates: List[SimilarityResult] = Field(default_factory=list)
    related_pages: List[SimilarityResult] = Field(default_factory=list)
    duplicate_count: int = 0
    near_duplicate_count: int = 0
    total_similar_pages: int = 0
    pages_compared: int = 0
    uniqueness_ratio: float = 1.0
    similarity_distribution: Dict[str, int] = Field(
        default_factory=lambda: {"high": 0, "medium": 0, "low": 0}
    )


class Recommendation(BaseModel):
    type: str
    priority: str
    title: str
    description: str
    suggestions: List[str] = Field(default_factory=list)
    impact: str


class OriginalityReport(BaseModel):
    """Per-page result merged by the orchestrator into the audit result."""

    page_id: str
    uniqueness: Optional[UniquenessAnalysis] = None
    duplicates: DuplicateDetection = Field(default_factory=DuplicateDetection)
    duplicate_penalty: float = 0.0
    originality_score: int = Field(ge=0, le=100)
    grade: str = "F"
    risk_level: str = "very_high"
    risk_flags: List[str] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)

    analysis_skipped: bool = False
    skip_reason: Optional[str] = None
    timed_out: bool = False
    error: Optional[str] = None
    error_flag: bool = False

    content_hash: Optional[str] = None
    content_length: int = 0
    shingle_count: int = 0
    analyzed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    elapsed_ms: float = 0.0
