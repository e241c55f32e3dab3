"""Content Corpus — session-scoped store of fingerprinted pages.

The only shared mutable state in the engine. One corpus per audit session;
it is discarded as a whole when the session ends.
"""
from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Tuple

from originality.errors import ConfigurationError, CorpusMismatchError
from originality.metrics import CORPUS_ENTRIES_GAUGE
from originality.models.corpus_entry import CorpusEntry
from originality.models.fingerprint import PageFingerprint
from originality.schemas.engine_config import SUPPORTED_HASH_ALGORITHMS, EngineConfig

logger = logging.getLogger(__name__)


class ContentCorpus:
    """Mapping url -> CorpusEntry with a single shingle size and hash algorithm."""

    def __init__(
        self,
        *,
        shingle_size: int = 5,
        hash_algorithm: str = "sha256",
        session_id: Optional[str] = None,
    ):
        self.shingle_size = int(shingle_size)
        self.hash_algorithm = str(hash_algorithm).strip().lower()
        if self.shingle_size < 1:
            raise ConfigurationError(f"shingle_size must be >= 1, got {shingle_size}")
        if self.hash_algorithm not in SUPPORTED_HASH_ALGORITHMS:
            raise ConfigurationError(f"Unknown hash algorithm '{hash_algorithm}' for corpus")
        self.session_id = session_id or uuid.uuid4().hex
        self._entries: Dict[str, CorpusEntry] = {}
        # Re-entrant so upsert() can run inside transaction().
        self._lock = threading.RLock()

    @classmethod
    def for_config(cls, config: EngineConfig, session_id: Optional[str] = None) -> "ContentCorpus":
        return cls(
            shingle_size=config.shingle_size,
            hash_algorithm=config.hash_algorithm,
            session_id=session_id,
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, url: object) -> bool:
        return url in self._entries

    def __repr__(self) -> str:
        return (
            f"ContentCorpus(session_id={self.session_id!r}, entries={len(self)}, "
            f"shingle_size={self.shingle_size}, hash_algorithm={self.hash_algorithm!r})"
        )

    def accepts(self, fingerprint: PageFingerprint) -> bool:
        return (
            fingerprint.shingle_size == self.shingle_size
            and fingerprint.algorithm == self.hash_algorithm
        )

    def is_compatible(self, config: EngineConfig) -> bool:
        return (
            config.shingle_size == self.shingle_size
            and config.hash_algorithm == self.hash_algorithm
        )

    def lookup(self, url: str) -> Optional[CorpusEntry]:
        return self._entries.get(url)

    def entries(self) -> Tuple[CorpusEntry, ...]:
        """Immutable snapshot of the current entries."""
        with self._lock:
            return tuple(self._entries.values())

    def upsert(self, entry: CorpusEntry) -> Optional[CorpusEntry]:
        """Insert or replace the entry for entry.url; returns the replaced entry, if any."""
        if not self.accepts(entry.fingerprint):
            raise CorpusMismatchError(
                f"Fingerprint for {entry.url} uses shingle_size={entry.fingerprint.shingle_size} "
                f"/ {entry.fingerprint.algorithm}; corpus {self.session_id} requires "
                f"shingle_size={self.shingle_size} / {self.hash_algorithm}"
            )
        with self._lock:
            previous = self._entries.get(entry.url)
            self._entries[entry.url] = entry
            CORPUS_ENTRIES_GAUGE.labels(session_id=self.session_id).set(len(self._entries))

        if previous is not None:
            logger.info("Corpus %s: replaced entry for %s", self.session_id, entry.url)
        return previous

    @contextmanager
    def transaction(self) -> Iterator["ContentCorpus"]:
        """Hold the corpus lock across a scan-then-insert sequence."""
        with self._lock:
            yield self

    def close(self) -> None:
        """Drop every entry and this session's gauge series at the end of an audit."""
        with self._lock:
            self._entries.clear()
            try:
                CORPUS_ENTRIES_GAUGE.remove(self.session_id)
            except KeyError:
                # Nothing was ever inserted.
                pass
