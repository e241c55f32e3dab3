"""CorpusEntry — one fingerprinted page held by a session corpus."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from originality.models.fingerprint import PageFingerprint


@dataclass(frozen=True)
class CorpusEntry:
    """Keyed by url. normalized_text is kept for segment matching, never re-hashed."""

    url: str
    normalized_text: str
    fingerprint: PageFingerprint
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
