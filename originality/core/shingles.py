"""Shingle Generator — word n-grams sliding one token at a time."""
from __future__ import annotations

import re
from typing import List, Sequence

TOKEN_STRIP_RE = re.compile(r"[^\w]+")


def tokenize(normalized: str, *, min_token_length: int = 3) -> List[str]:
    """Whitespace tokens with punctuation stripped; shorter tokens are dropped."""
    if not normalized:
        return []
    tokens = []
    for raw in normalized.split():
        token = TOKEN_STRIP_RE.sub("", raw)
        if token and len(token) >= min_token_length:
            tokens.append(token)
    return tokens


def generate_shingles(tokens: Sequence[str], n: int = 5) -> List[str]:
    if n < 1:
        raise ValueError("shingle size must be >= 1")
    if len(tokens) < n:
        return []
    return [" ".join(tokens[i : i + n]) for i in range(len(tokens) - n + 1)]
