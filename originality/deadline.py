"""Cooperative per-page compute budget."""
from __future__ import annotations

import time
from typing import Optional

from originality.errors import AnalysisTimeout


class Deadline:
    """Monotonic deadline checked between pipeline stages.

    A `None` budget never expires.
    """

    def __init__(self, budget_s: Optional[float] = None):
        self.budget_s = budget_s
        self.started_at = time.monotonic()

    @property
    def elapsed_s(self) -> float:
        return time.monotonic() - self.started_at

    def expired(self) -> bool:
        return self.budget_s is not None and self.elapsed_s > self.budget_s

    def check(self, stage: str) -> None:
        if self.expired():
            raise AnalysisTimeout(stage, float(self.budget_s or 0.0))
