from __future__ import annotations

import itertools
from typing import Callable, List, Sequence

import pytest

from originality.engine import OriginalityEngine
from originality.schemas.engine_config import EngineConfig

_SYLLABLES = (
    "ba", "ce", "di", "fo", "gu", "ha", "je", "ki", "lo", "mu",
    "na", "pe", "ri", "so", "tu", "va", "we", "xi", "yo", "zu",
)
# Sentence lengths (in words) cycled through when assembling a page.
_SENTENCE_PATTERN = (7, 15, 10, 22, 12, 18, 8, 25)

# 8000 distinct six-letter words.
VOCABULARY: List[str] = ["".join(parts) for parts in itertools.product(_SYLLABLES, repeat=3)]


def compose_page(words: Sequence[str]) -> str:
    sentences = []
    pos = 0
    for length in itertools.cycle(_SENTENCE_PATTERN):
        if pos >= len(words):
            break
        chunk = list(words[pos : pos + length])
        pos += length
        chunk[0] = chunk[0].capitalize()
        sentences.append(" ".join(chunk) + ".")
    return " ".join(sentences)


@pytest.fixture
def page_words() -> Callable[[int], List[str]]:
    """Block of 500 distinct words; different offsets never share a word."""

    def _words(offset: int = 0) -> List[str]:
        return VOCABULARY[offset * 500 : (offset + 1) * 500]

    return _words


@pytest.fixture
def page_a(page_words) -> str:
    return compose_page(page_words(0))


@pytest.fixture
def page_c(page_words) -> str:
    """Page A with five words swapped out; shares roughly 90% of its shingles with A."""
    words = page_words(0)
    fresh = page_words(15)
    for i, pos in enumerate((50, 150, 250, 350, 450)):
        words[pos] = fresh[i]
    return compose_page(words)


@pytest.fixture
def engine() -> OriginalityEngine:
    return OriginalityEngine(EngineConfig())


@pytest.fixture
def page_x(page_words) -> str:
    """Unrelated page sharing no vocabulary with A."""
    return compose_page(page_words(3))
