"""Intrinsic uniqueness — lexical, structural and pattern diversity.

Each signal is a hook: normalized text in, 0–1 sub-score out. Callers may
replace the defaults or register extra signals and weight them.
"""
from __future__ import annotations

import math
from functools import partial
from typing import Callable, Dict, List, Mapping, Optional

from originality.core.shingles import tokenize
from originality.core.text_normalizer import split_sentences
from originality.errors import ConfigurationError
from originality.schemas.report import UniquenessAnalysis

DiversityHook = Callable[[str], float]

# Coefficient of variation of sentence lengths that counts as fully varied prose.
STRUCTURAL_CV_CEILING = 0.5


def _clamp01(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"Diversity hook '{name}' returned a non-finite value: {value}")
    return max(0.0, min(1.0, value))


def _variance(numbers: List[int]) -> float:
    if not numbers:
        return 0.0
    mean = sum(numbers) / len(numbers)
    return sum((n - mean) ** 2 for n in numbers) / len(numbers)


def _sentence_lengths(normalized: str, min_token_length: int) -> List[int]:
    return [len(tokenize(s, min_token_length=min_token_length)) for s in split_sentences(normalized)]


def lexical_diversity(normalized: str, *, min_token_length: int = 3) -> float:
    """Type-token ratio."""
    tokens = tokenize(normalized, min_token_length=min_token_length)
    if not tokens:
        return 0.0
    return len(set(tokens)) / len(tokens)


def structural_diversity(normalized: str, *, min_token_length: int = 3) -> float:
    """Sentence-length variation; a single sentence has none."""
    lengths = _sentence_lengths(normalized, min_token_length)
    if len(lengths) < 2:
        return 0.0
    mean = sum(lengths) / len(lengths)
    if mean <= 0:
        return 0.0
    cv = math.sqrt(_variance(lengths)) / mean
    return min(1.0, cv / STRUCTURAL_CV_CEILING)


def pattern_diversity(normalized: str, *, min_token_length: int = 3) -> float:
    """Distinct token trigrams over all token trigrams; 1.0 means no repeated phrasing."""
    tokens = tokenize(normalized, min_token_length=min_token_length)
    trigrams = list(zip(tokens, tokens[1:], tokens[2:]))
    if not trigrams:
        return 0.0
    return len(set(trigrams)) / len(trigrams)


def categorize_diversity(diversity: float) -> str:
    if diversity >= 0.7:
        return "high"
    if diversity >= 0.5:
        return "medium"
    if diversity >= 0.3:
        return "low"
    return "very-low"


def uniqueness_level(score: float) -> str:
    if score >= 90:
        return "excellent"
    if score >= 75:
        return "good"
    if score >= 60:
        return "fair"
    return "poor"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class UniquenessScorer:
    """Weighted blend of diversity hooks into a 0–100 uniqueness score."""

    def __init__(
        self,
        weights: Mapping[str, float],
        hooks: Optional[Mapping[str, DiversityHook]] = None,
        *,
        min_token_length: int = 3,
    ):
        self.min_token_length = min_token_length
        self.hooks: Dict[str, DiversityHook] = {
            "lexical": partial(lexical_diversity, min_token_length=min_token_length),
            "structural": partial(structural_diversity, min_token_length=min_token_length),
            "pattern": partial(pattern_diversity, min_token_length=min_token_length),
        }
        for name, hook in (hooks or {}).items():
            if not callable(hook):
                raise ConfigurationError(f"Diversity hook '{name}' is not callable")
            self.hooks[str(name)] = hook

        missing = sorted(name for name in weights if name not in self.hooks)
        if missing:
            raise ConfigurationError(f"No diversity hook registered for weighted signals: {missing}")
        self.weights = {name: float(w) for name, w in weights.items()}
        self._total_weight = sum(self.weights.values())
        if self._total_weight <= 0:
            raise ConfigurationError("Uniqueness weights must have a positive total")

    def signals(self, normalized: str) -> Dict[str, float]:
        return {name: _clamp01(name, hook(normalized)) for name, hook in self.hooks.items()}

    def evaluate(self, normalized: str) -> UniquenessAnalysis:
        signals = self.signals(normalized)
        weighted = sum(signals[name] * weight for name, weight in self.weights.items())
        score = max(0, min(100, round_half_up(100.0 * weighted / self._total_weight)))

        tokens = tokenize(normalized, min_token_length=self.min_token_length)
        lengths = _sentence_lengths(normalized, self.min_token_length)
        lexical = signals["lexical"]

        return UniquenessAnalysis(
            lexical_diversity=lexical,
            structural_diversity=signals["structural"],
            pattern_diversity=signals["pattern"],
            lexical_category=categorize_diversity(lexical),
            total_words=len(tokens),
            unique_words=len(set(tokens)),
            sentence_count=len(lengths),
            avg_sentence_length=(sum(lengths) / len(lengths)) if lengths else 0.0,
            sentence_length_variance=_variance(lengths),
            signals=signals,
            uniqueness_score=score,
            uniqueness_level=uniqueness_level(score),
        )
