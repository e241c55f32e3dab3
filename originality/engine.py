"""Originality Engine — per-page duplicate detection and scoring.

Normalize, fingerprint and measure uniqueness without touching shared state,
then compare against the session corpus, score and insert the page as one
step under the corpus lock. The insert is always the last action, so a page
that fails, times out or is cancelled leaves the corpus unmodified.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from originality.config import settings
from originality.core.fingerprint import fingerprint_text
from originality.core.segments import find_matching_segments
from originality.core.similarity import scan_corpus
from originality.core.text_normalizer import normalize_text
from originality.corpus import ContentCorpus
from originality.deadline import Deadline
from originality.errors import (
    AnalysisTimeout,
    ComputationError,
    ConfigurationError,
    CorpusMismatchError,
    InsufficientContent,
)
from originality.metrics import (
    ANALYSES_TOTAL,
    ANALYSIS_LATENCY_SECONDS,
    DUPLICATES_TOTAL,
    ORIGINALITY_SCORE_OBS,
)
from originality.models.corpus_entry import CorpusEntry
from originality.schemas.engine_config import EngineConfig
from originality.schemas.report import (
    DuplicateDetection,
    OriginalityReport,
    SimilarityClass,
    SimilarityResult,
    UniquenessAnalysis,
)
from originality.scoring.originality import (
    calculate_grade,
    calculate_originality_score,
    calculate_risk_level,
    generate_recommendations,
)
from originality.scoring.uniqueness import DiversityHook, UniquenessScorer, uniqueness_level

logger = logging.getLogger(__name__)

SKIPPED_SCORE = 50
ERROR_SCORE = 0

ConfigInput = Union[EngineConfig, Mapping[str, Any], None]


def _resolve_config(config: ConfigInput) -> EngineConfig:
    try:
        if config is None:
            return EngineConfig.from_settings(settings)
        if isinstance(config, EngineConfig):
            # Re-validate: model_construct() / model_copy() bypass validators.
            return EngineConfig.model_validate(config.model_dump())
        return EngineConfig.model_validate(dict(config))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid originality engine configuration: {exc}") from exc


def _similarity_distribution(results: List[SimilarityResult]) -> dict[str, int]:
    return {
        "high": sum(1 for r in results if r.similarity > 0.7),
        "medium": sum(1 for r in results if 0.4 < r.similarity <= 0.7),
        "low": sum(1 for r in results if r.similarity <= 0.4),
    }


class OriginalityEngine:
    """Validated configuration plus the uniqueness hooks; stateless between pages."""

    def __init__(
        self,
        config: ConfigInput = None,
        *,
        hooks: Optional[Mapping[str, DiversityHook]] = None,
    ):
        self.config = _resolve_config(config)
        self.uniqueness_scorer = UniquenessScorer(
            self.config.uniqueness_weights,
            hooks,
            min_token_length=self.config.effective_min_token_length,
        )

    def new_corpus(self, session_id: Optional[str] = None) -> ContentCorpus:
        return ContentCorpus.for_config(self.config, session_id=session_id)

    def analyze(
        self,
        page_id: str,
        raw_text: Optional[str],
        corpus: ContentCorpus,
        *,
        timeout_s: Optional[float] = None,
    ) -> OriginalityReport:
        """Analyze one page against the corpus. Always returns a report."""
        page_id = str(page_id)
        budget = timeout_s if timeout_s is not None else self.config.max_compute_seconds
        deadline = Deadline(budget)

        try:
            report = self._analyze(page_id, raw_text, corpus, deadline)
            outcome = "scored"
        except InsufficientContent as exc:
            logger.info("Originality analysis skipped for %s: %s", page_id, exc.reason)
            report = self._skipped_report(page_id, exc.reason, content_length=exc.content_length)
            outcome = "skipped"
        except AnalysisTimeout as exc:
            logger.warning(f"Originality analysis for {page_id} timed out: {exc}")
            report = self._skipped_report(page_id, str(exc), timed_out=True)
            outcome = "timeout"
        except CorpusMismatchError as exc:
            logger.error("Originality analysis for %s rejected: %s", page_id, exc)
            report = self._error_report(page_id, str(exc))
            outcome = "error"
        except Exception as exc:
            error = ComputationError(page_id, exc)
            logger.exception("Originality analysis failed for %s: %s", page_id, error)
            report = self._error_report(page_id, str(error))
            outcome = "error"

        report.elapsed_ms = round(deadline.elapsed_s * 1000.0, 3)
        ANALYSES_TOTAL.labels(outcome=outcome).inc()
        ANALYSIS_LATENCY_SECONDS.observe(deadline.elapsed_s)
        return report

    def analyze_many(
        self,
        pages: Iterable[Tuple[str, Optional[str]]],
        corpus: ContentCorpus,
        *,
        max_workers: int = 4,
        timeout_s: Optional[float] = None,
    ) -> List[OriginalityReport]:
        """Analyze (page_id, raw_text) pairs concurrently; reports keep input order.

        Fingerprinting runs in parallel; the corpus lock serializes compare-then-insert,
        so which of two concurrent duplicates is reported as the copy depends on
        commit order.
        """
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="originality") as pool:
            futures = [
                pool.submit(self.analyze, page_id, raw_text, corpus, timeout_s=timeout_s)
                for page_id, raw_text in pages
            ]
            return [future.result() for future in futures]

    def _analyze(
        self,
        page_id: str,
        raw_text: Optional[str],
        corpus: ContentCorpus,
        deadline: Deadline,
    ) -> OriginalityReport:
        config = self.config

        # 1. Pure stages, no lock held
        normalized = normalize_text(raw_text)
        fingerprint = fingerprint_text(normalized, config)
        deadline.check("fingerprint")
        uniqueness = self.uniqueness_scorer.evaluate(normalized)
        deadline.check("uniqueness")

        if not corpus.accepts(fingerprint):
            raise CorpusMismatchError(
                f"Corpus {corpus.session_id} uses shingle_size={corpus.shingle_size} / "
                f"{corpus.hash_algorithm}; engine uses shingle_size={config.shingle_size} / "
                f"{config.hash_algorithm}"
            )

        # 2. Compare-then-insert as one atomic step
        with corpus.transaction():
            results = scan_corpus(
                fingerprint,
                corpus.entries(),
                config,
                exclude_url=page_id,
                deadline=deadline,
            )
            duplicates = self._detect_duplicates(normalized, results, corpus)
            scored = calculate_originality_score(uniqueness, duplicates, config)
            score = int(scored["score"])

            report = OriginalityReport(
                page_id=page_id,
                uniqueness=uniqueness,
                duplicates=duplicates,
                duplicate_penalty=float(scored["duplicate_penalty"]),
                originality_score=score,
                grade=calculate_grade(score),
                risk_level=calculate_risk_level(score),
                risk_flags=list(scored["reasons"]),
                recommendations=generate_recommendations(uniqueness, duplicates, score),
                content_hash=fingerprint.content_hash,
                content_length=len(normalized),
                shingle_count=fingerprint.shingle_count,
            )

            deadline.check("corpus_commit")
            corpus.upsert(
                CorpusEntry(url=page_id, normalized_text=normalized, fingerprint=fingerprint)
            )

        for result in duplicates.exact_duplicates + duplicates.near_duplicates + duplicates.related_pages:
            DUPLICATES_TOTAL.labels(classification=result.classification.value).inc()
        ORIGINALITY_SCORE_OBS.observe(score)

        logger.info(
            "Originality for %s: score=%s exact=%s near=%s related=%s compared=%s",
            page_id,
            score,
            duplicates.duplicate_count,
            duplicates.near_duplicate_count,
            len(duplicates.related_pages),
            duplicates.pages_compared,
        )
        return report

    def _detect_duplicates(
        self,
        normalized: str,
        results: List[SimilarityResult],
        corpus: ContentCorpus,
    ) -> DuplicateDetection:
        exact: List[SimilarityResult] = []
        near: List[SimilarityResult] = []
        related: List[SimilarityResult] = []

        for result in results:
            if result.classification == SimilarityClass.RELATED:
                related.append(result)
                continue
            if result.classification not in (SimilarityClass.EXACT, SimilarityClass.NEAR):
                continue
            entry = corpus.lookup(result.other_url)
            segments = (
                find_matching_segments(
                    normalized,
                    entry.normalized_text,
                    min_length=self.config.min_segment_length,
                )
                if entry is not None
                else []
            )
            enriched = result.model_copy(update={"matched_segments": segments})
            (exact if result.classification == SimilarityClass.EXACT else near).append(enriched)

        compared = len(results)
        similar = len(exact) + len(near)
        return DuplicateDetection(
            exact_duplicates=exact,
            near_duplicates=near,
            related_pages=related,
            duplicate_count=len(exact),
            near_duplicate_count=len(near),
            total_similar_pages=similar,
            pages_compared=compared,
            uniqueness_ratio=(1.0 - similar / compared) if compared else 1.0,
            similarity_distribution=_similarity_distribution(exact + near + related),
        )

    def _skipped_report(
        self,
        page_id: str,
        reason: str,
        *,
        content_length: int = 0,
        timed_out: bool = False,
    ) -> OriginalityReport:
        return OriginalityReport(
            page_id=page_id,
            uniqueness=UniquenessAnalysis(
                uniqueness_score=SKIPPED_SCORE,
                uniqueness_level=uniqueness_level(SKIPPED_SCORE),
            ),
            originality_score=SKIPPED_SCORE,
            grade="N/A",
            risk_level="unknown",
            risk_flags=["ORIGINALITY_TIMEOUT" if timed_out else "ORIGINALITY_CONTENT_TOO_SHORT"],
            analysis_skipped=True,
            skip_reason=reason,
            timed_out=timed_out,
            content_length=content_length,
        )

    def _error_report(self, page_id: str, message: str) -> OriginalityReport:
        return OriginalityReport(
            page_id=page_id,
            originality_score=ERROR_SCORE,
            grade="N/A",
            risk_level="unknown",
            risk_flags=["ORIGINALITY_ANALYSIS_ERROR"],
            error=f"Content originality analysis failed: {message}",
            error_flag=True,
        )


def analyze(
    page_id: str,
    raw_text: Optional[str],
    corpus: ContentCorpus,
    config: ConfigInput = None,
) -> OriginalityReport:
    """One-shot helper; raises ConfigurationError for an invalid config, never for a page."""
    return OriginalityEngine(config).analyze(page_id, raw_text, corpus)
