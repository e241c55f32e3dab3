"""Fingerprint Builder — per-shingle hashes and one aggregate content hash."""
from __future__ import annotations

import hashlib
import logging
from typing import Sequence

from originality.core.shingles import generate_shingles, tokenize
from originality.errors import InsufficientContent
from originality.models.fingerprint import PageFingerprint
from originality.schemas.engine_config import EngineConfig

logger = logging.getLogger(__name__)


def hash_hex(value: str, algorithm: str = "sha256") -> str:
    return hashlib.new(algorithm, value.encode("utf-8")).hexdigest()


def build_fingerprint(
    shingles: Sequence[str],
    *,
    algorithm: str = "sha256",
    shingle_size: int = 5,
) -> PageFingerprint:
    """Hash each shingle independently; content_hash covers the hashes in generation order."""
    if not shingles:
        raise InsufficientContent("No shingles generated from content")

    shingle_hashes = [hash_hex(shingle, algorithm) for shingle in shingles]
    content_hash = hash_hex("".join(shingle_hashes), algorithm)

    return PageFingerprint(
        content_hash=content_hash,
        shingle_hashes=frozenset(shingle_hashes),
        shingle_count=len(shingle_hashes),
        algorithm=algorithm,
        shingle_size=shingle_size,
    )


def fingerprint_text(normalized: str, config: EngineConfig) -> PageFingerprint:
    """Fingerprint already-normalized text, refusing content below the configured minimum."""
    if len(normalized) < config.min_content_length:
        raise InsufficientContent(
            f"Content too short for meaningful analysis ({len(normalized)} < {config.min_content_length} chars)",
            content_length=len(normalized),
        )

    tokens = tokenize(normalized, min_token_length=config.effective_min_token_length)
    shingles = generate_shingles(tokens, config.shingle_size)
    if not shingles:
        raise InsufficientContent(
            f"Only {len(tokens)} tokens, fewer than shingle size {config.shingle_size}",
            content_length=len(normalized),
        )

    fingerprint = build_fingerprint(
        shingles,
        algorithm=config.hash_algorithm,
        shingle_size=config.shingle_size,
    )
    logger.debug(
        "Fingerprinted %s shingles (%s unique) with %s",
        fingerprint.shingle_count,
        fingerprint.unique_shingles,
        fingerprint.algorithm,
    )
    return fingerprint
