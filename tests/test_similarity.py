from __future__ import annotations

from originality.core.fingerprint import build_fingerprint
from originality.core.segments import find_matching_segments
from originality.core.similarity import classify_similarity, jaccard_similarity, scan_corpus
from originality.models.corpus_entry import CorpusEntry
from originality.schemas.engine_config import EngineConfig
from originality.schemas.report import SimilarityClass


def _entry(url: str, shingles: list[str]) -> CorpusEntry:
    return CorpusEntry(
        url=url,
        normalized_text=" ".join(shingles),
        fingerprint=build_fingerprint(shingles, algorithm="sha256", shingle_size=1),
    )


def test_jaccard_basic_values() -> None:
    assert jaccard_similarity({"a", "b"}, {"a", "b"}) == 1.0
    assert jaccard_similarity({"a", "b"}, {"c"}) == 0.0
    assert jaccard_similarity({"a", "b", "c"}, {"b", "c", "d"}) == 0.5


def test_jaccard_empty_sets_are_never_identical() -> None:
    assert jaccard_similarity(set(), set()) == 0.0
    assert jaccard_similarity({"a"}, set()) == 0.0
    assert jaccard_similarity(frozenset(), {"a"}) == 0.0


def test_jaccard_is_symmetric() -> None:
    pairs = [
        ({"a", "b", "c"}, {"c", "d"}),
        ({str(i) for i in range(100)}, {str(i) for i in range(40, 300)}),
        ({"x"}, {"x", "y", "z", "w"}),
    ]
    for a, b in pairs:
        assert jaccard_similarity(a, b) == jaccard_similarity(b, a)


def test_classification_thresholds_are_inclusive_lower_bounds() -> None:
    config = EngineConfig()
    assert classify_similarity(1.0, config) == SimilarityClass.EXACT
    assert classify_similarity(0.95, config) == SimilarityClass.EXACT
    assert classify_similarity(0.949, config) == SimilarityClass.NEAR
    assert classify_similarity(0.85, config) == SimilarityClass.NEAR
    assert classify_similarity(0.849, config) == SimilarityClass.RELATED
    assert classify_similarity(0.30, config) == SimilarityClass.RELATED
    assert classify_similarity(0.299, config) == SimilarityClass.DISTINCT
    assert classify_similarity(0.0, config) == SimilarityClass.DISTINCT


def test_classification_follows_custom_thresholds() -> None:
    config = EngineConfig(exact_threshold=0.9, near_threshold=0.6, related_threshold=0.2)
    assert classify_similarity(0.91, config) == SimilarityClass.EXACT
    assert classify_similarity(0.7, config) == SimilarityClass.NEAR
    assert classify_similarity(0.25, config) == SimilarityClass.RELATED


def test_scan_returns_one_result_per_entry_excluding_self() -> None:
    config = EngineConfig()
    entries = [
        _entry("https://site/a", ["a", "b", "c", "d"]),
        _entry("https://site/b", ["a", "b", "c", "e"]),
        _entry("https://site/c", ["x", "y"]),
    ]
    candidate = build_fingerprint(["a", "b", "c", "d"], algorithm="sha256", shingle_size=1)

    results = scan_corpus(candidate, entries, config, exclude_url="https://site/a")

    assert [r.other_url for r in results] == ["https://site/b", "https://site/c"]
    assert results[0].similarity == 0.6
    assert results[0].classification == SimilarityClass.RELATED
    assert results[1].similarity == 0.0
    assert results[1].classification == SimilarityClass.DISTINCT


def test_scan_orders_by_similarity_then_url() -> None:
    config = EngineConfig()
    entries = [
        _entry("https://site/z", ["a", "b"]),
        _entry("https://site/m", ["a", "b"]),
        _entry("https://site/q", ["a", "q"]),
    ]
    candidate = build_fingerprint(["a", "b"], algorithm="sha256", shingle_size=1)
    results = scan_corpus(candidate, entries, config)
    assert [r.other_url for r in results] == ["https://site/m", "https://site/z", "https://site/q"]
    assert all(r.classification == SimilarityClass.EXACT for r in results[:2])


def test_find_matching_segments_reports_shared_long_sentences() -> None:
    shared = "the committee approved the revised budget for the northern district"
    text_a = f"{shared}. a short one. unique opening statement about river maintenance works."
    text_b = f"completely different introduction for the second page here. {shared}."
    assert find_matching_segments(text_a, text_b, min_length=50) == [shared]
    assert find_matching_segments(text_a, text_b, min_length=200) == []
    assert find_matching_segments("", text_b) == []
