"""Segment-level overlap between two normalized texts, for duplicate reporting."""
from __future__ import annotations

from typing import List

from originality.core.text_normalizer import split_sentences


def find_matching_segments(text_a: str, text_b: str, *, min_length: int = 50) -> List[str]:
    """Sentences of at least min_length chars present in both texts, in text_a order."""
    if not text_a or not text_b:
        return []
    other = {s for s in split_sentences(text_b) if len(s) >= min_length}
    if not other:
        return []
    matched: List[str] = []
    seen: set[str] = set()
    for sentence in split_sentences(text_a):
        if len(sentence) < min_length or sentence in seen:
            continue
        if sentence in other:
            seen.add(sentence)
            matched.append(sentence)
    return matched
