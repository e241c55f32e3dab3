"""ORIGINALITY score — duplicate penalties blended with intrinsic uniqueness.

Policy: start at 100, subtract a single heavy penalty when any exact
duplicate exists and a fixed penalty per near duplicate, average with the
uniqueness score, clamp to [0, 100] and round. In the default `post_blend`
mode the penalties are taken off the blended value, so one near duplicate
costs exactly `near_penalty` points and an exact duplicate bounds the score
at 50. Adding a duplicate never raises the score in either mode.
"""
from __future__ import annotations

from typing import Any, Dict, List

from originality.schemas.engine_config import EngineConfig, PenaltyMode
from originality.schemas.report import DuplicateDetection, Recommendation, UniquenessAnalysis
from originality.scoring.uniqueness import round_half_up

# Stable REASONS codes
REASONS = {
    "ORIGINALITY_EXACT_DUPLICATE": "Exact duplicate of another page in this audit",
    "ORIGINALITY_NEAR_DUPLICATE": "Near duplicate of another page in this audit",
    "ORIGINALITY_RELATED_CONTENT": "Substantial overlap with other pages (not penalized)",
    "ORIGINALITY_LOW_UNIQUENESS": "Low intrinsic uniqueness score",
    "ORIGINALITY_LOW_LEXICAL_DIVERSITY": "Very repetitive vocabulary",
    "ORIGINALITY_REPETITIVE_PATTERNS": "Repeated phrasing within the page",
    "ORIGINALITY_CONTENT_TOO_SHORT": "Content too short to fingerprint",
    "ORIGINALITY_TIMEOUT": "Compute budget exhausted before scoring",
    "ORIGINALITY_ANALYSIS_ERROR": "Analysis failed for this page",
}

LOW_UNIQUENESS_THRESHOLD = 70
LOW_LEXICAL_THRESHOLD = 0.3
LOW_PATTERN_THRESHOLD = 0.5
LOW_ORIGINALITY_THRESHOLD = 80


def calculate_duplicate_penalty(exact_count: int, near_count: int, *, exact_penalty: float, near_penalty: float) -> float:
    penalty = exact_penalty if exact_count > 0 else 0.0
    return penalty + near_penalty * max(0, near_count)


def calculate_originality_score(
    uniqueness: UniquenessAnalysis,
    duplicates: DuplicateDetection,
    config: EngineConfig,
) -> Dict[str, Any]:
    """Return the clamped integer score, the duplicate penalty and reason codes."""
    penalty = calculate_duplicate_penalty(
        duplicates.duplicate_count,
        duplicates.near_duplicate_count,
        exact_penalty=config.exact_penalty,
        near_penalty=config.near_penalty,
    )

    if config.penalty_mode == PenaltyMode.PRE_BLEND:
        raw_score = ((100.0 - penalty) + uniqueness.uniqueness_score) / 2.0
    else:
        raw_score = (100.0 + uniqueness.uniqueness_score) / 2.0 - penalty

    final_score = round_half_up(max(0.0, min(100.0, raw_score)))

    reasons = []
    if duplicates.duplicate_count > 0: reasons.append("ORIGINALITY_EXACT_DUPLICATE")
    if duplicates.near_duplicate_count > 0: reasons.append("ORIGINALITY_NEAR_DUPLICATE")
    if duplicates.related_pages: reasons.append("ORIGINALITY_RELATED_CONTENT")
    if uniqueness.uniqueness_score < LOW_UNIQUENESS_THRESHOLD: reasons.append("ORIGINALITY_LOW_UNIQUENESS")
    if uniqueness.lexical_diversity < LOW_LEXICAL_THRESHOLD: reasons.append("ORIGINALITY_LOW_LEXICAL_DIVERSITY")
    if uniqueness.pattern_diversity < LOW_PATTERN_THRESHOLD: reasons.append("ORIGINALITY_REPETITIVE_PATTERNS")

    return {
        "score": final_score,
        "duplicate_penalty": penalty,
        "reasons": reasons,
    }


def calculate_grade(score: float) -> str:
    if score >= 90: return "A+"
    if score >= 85: return "A"
    if score >= 80: return "B+"
    if score >= 75: return "B"
    if score >= 70: return "C+"
    if score >= 65: return "C"
    if score >= 60: return "D"
    return "F"


def calculate_risk_level(score: float) -> str:
    if score >= 90: return "very_low"
    if score >= 80: return "low"
    if score >= 70: return "medium"
    if score >= 60: return "high"
    return "very_high"


def generate_recommendations(
    uniqueness: UniquenessAnalysis,
    duplicates: DuplicateDetection,
    originality_score: int,
) -> List[Recommendation]:
    recommendations: List[Recommendation] = []

    if duplicates.duplicate_count > 0:
        recommendations.append(
            Recommendation(
                type="duplicate-content",
                priority="high",
                title="Exact Duplicate Content Detected",
                description=f"Found {duplicates.duplicate_count} pages with identical content",
                suggestions=[
                    "Consolidate duplicate pages using 301 redirects",
                    "Use canonical tags to specify the preferred version",
                    "Differentiate content to add unique value",
                    "Consider noindex for low-value duplicates",
                ],
                impact="seo-ranking",
            )
        )

    if duplicates.near_duplicate_count > 0:
        recommendations.append(
            Recommendation(
                type="near-duplicate-content",
                priority="medium",
                title="Near-Duplicate Content Detected",
                description=f"Found {duplicates.near_duplicate_count} pages with largely overlapping content",
                suggestions=[
                    "Rewrite shared passages for each page's audience",
                    "Merge pages that target the same intent",
                    "Point near-duplicates at a canonical URL",
                ],
                impact="seo-ranking",
            )
        )

    if uniqueness.uniqueness_score < LOW_UNIQUENESS_THRESHOLD:
        recommendations.append(
            Recommendation(
                type="content-uniqueness",
                priority="medium",
                title="Improve Content Uniqueness",
                description=f"Content uniqueness score: {uniqueness.uniqueness_score}/100",
                suggestions=[
                    "Vary sentence structure and vocabulary",
                    "Add original insights and analysis",
                    "Include unique data and examples",
                    "Reduce formulaic content patterns",
                ],
                impact="content-quality",
            )
        )

    if originality_score < LOW_ORIGINALITY_THRESHOLD:
        recommendations.append(
            Recommendation(
                type="content-originality",
                priority="medium",
                title="Enhance Content Originality",
                description=f"Content originality score: {originality_score}/100",
                suggestions=[
                    "Add original research and data",
                    "Incorporate expert insights",
                    "Create distinctive content formats",
                ],
                impact="authority-building",
            )
        )

    return recommendations
