"""Error taxonomy for the originality engine."""
from __future__ import annotations


class OriginalityError(Exception):
    """Base class for engine errors."""


class InsufficientContent(OriginalityError):
    """Text too short (or too sparse) to fingerprint meaningfully."""

    def __init__(self, reason: str, *, content_length: int = 0):
        super().__init__(reason)
        self.reason = reason
        self.content_length = content_length


class ConfigurationError(OriginalityError, ValueError):
    """Invalid engine configuration; raised once, at construction."""


class CorpusMismatchError(ConfigurationError):
    """Fingerprint built with a shingle size or hash the corpus does not use."""


class ComputationError(OriginalityError):
    """Unexpected failure while hashing, comparing or scoring a page."""

    def __init__(self, page_id: str, cause: BaseException):
        super().__init__(f"{type(cause).__name__}: {cause}")
        self.page_id = page_id
        self.cause = cause


class AnalysisTimeout(OriginalityError):
    """Per-page compute budget exhausted before the corpus write."""

    def __init__(self, stage: str, budget_s: float):
        super().__init__(f"compute budget of {budget_s:.3f}s exceeded during {stage}")
        self.stage = stage
        self.budget_s = budget_s
