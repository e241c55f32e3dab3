"""Prometheus metrics for the originality engine."""
from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram


ANALYSES_TOTAL = Counter(
    "originality_analyses_total",
    "Page analyses by outcome",
    ["outcome"],
)

DUPLICATES_TOTAL = Counter(
    "originality_duplicates_total",
    "Similarity results reported by classification",
    ["classification"],
)

COMPARISONS_TOTAL = Counter(
    "originality_comparisons_total",
    "Pairwise fingerprint comparisons performed against the corpus",
)

ORIGINALITY_SCORE_OBS = Histogram(
    "originality_score",
    "Originality score distribution for analyzed pages",
    buckets=(0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100),
)

ANALYSIS_LATENCY_SECONDS = Histogram(
    "originality_analysis_seconds",
    "Wall time spent analyzing a single page",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)

CORPUS_ENTRIES_GAUGE = Gauge(
    "originality_corpus_entries",
    "Entries held by each live session corpus",
    ["session_id"],
)
