"""PageFingerprint — compact content signature of a page."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PageFingerprint:
    """Shingle-hash set plus one aggregate hash over the shingles in generation order."""

    content_hash: str
    shingle_hashes: frozenset[str]
    shingle_count: int
    algorithm: str
    shingle_size: int

    @property
    def unique_shingles(self) -> int:
        return len(self.shingle_hashes)
