"""Text Normalizer — canonical lower-cased text for fingerprinting.

Keeps sentence terminators so sentence-level signals survive normalization.
"""
from __future__ import annotations

import re
import unicodedata

NOISE_RE = re.compile(r"[^\w\s.!?]+")
WHITESPACE_RE = re.compile(r"\s+")
SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


def normalize_text(value: str | None) -> str:
    text = str(value or "")
    text = unicodedata.normalize("NFKC", text).lower()
    text = NOISE_RE.sub("", text)
    return WHITESPACE_RE.sub(" ", text).strip()


def split_sentences(normalized: str, *, min_length: int = 11) -> list[str]:
    """Split normalized text on terminator runs, dropping fragments under min_length chars."""
    if not normalized:
        return []
    sentences: list[str] = []
    for chunk in SENTENCE_SPLIT_RE.split(normalized):
        sentence = chunk.strip()
        if len(sentence) >= min_length:
            sentences.append(sentence)
    return sentences
