"""Similarity Engine — Jaccard index over shingle-hash sets.

Every new page is compared against every corpus entry: O(N) per page and
O(N^2) per audit session.
"""
from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, List, Optional

from originality.deadline import Deadline
from originality.metrics import COMPARISONS_TOTAL
from originality.models.corpus_entry import CorpusEntry
from originality.models.fingerprint import PageFingerprint
from originality.schemas.engine_config import EngineConfig
from originality.schemas.report import SimilarityClass, SimilarityResult

logger = logging.getLogger(__name__)

# Deadline is polled once per this many comparisons.
DEADLINE_POLL_EVERY = 64


def jaccard_similarity(a: AbstractSet[str], b: AbstractSet[str]) -> float:
    """|A ∩ B| / |A ∪ B|; an empty side yields 0.0, never 1.0."""
    if not a or not b:
        return 0.0
    small, large = (a, b) if len(a) <= len(b) else (b, a)
    intersection = sum(1 for item in small if item in large)
    union = len(a) + len(b) - intersection
    return intersection / union


def fingerprint_similarity(first: PageFingerprint, second: PageFingerprint) -> float:
    return jaccard_similarity(first.shingle_hashes, second.shingle_hashes)


def classify_similarity(similarity: float, config: EngineConfig) -> SimilarityClass:
    if similarity >= config.exact_threshold:
        return SimilarityClass.EXACT
    if similarity >= config.near_threshold:
        return SimilarityClass.NEAR
    if similarity >= config.related_threshold:
        return SimilarityClass.RELATED
    return SimilarityClass.DISTINCT


def scan_corpus(
    fingerprint: PageFingerprint,
    entries: Iterable[CorpusEntry],
    config: EngineConfig,
    *,
    exclude_url: Optional[str] = None,
    deadline: Optional[Deadline] = None,
) -> List[SimilarityResult]:
    """One result per corpus entry (self excluded), most similar first."""
    results: List[SimilarityResult] = []
    compared = 0
    for entry in entries:
        if exclude_url is not None and entry.url == exclude_url:
            continue
        if deadline is not None and compared % DEADLINE_POLL_EVERY == 0:
            deadline.check("similarity_scan")
        similarity = fingerprint_similarity(fingerprint, entry.fingerprint)
        compared += 1
        results.append(
            SimilarityResult(
                other_url=entry.url,
                similarity=similarity,
                classification=classify_similarity(similarity, config),
            )
        )

    COMPARISONS_TOTAL.inc(compared)
    results.sort(key=lambda r: (-r.similarity, r.other_url))
    logger.debug("Compared fingerprint against %s corpus entries", compared)
    return results
