from __future__ import annotations

import enum
import hashlib
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from originality.config import Settings


# Variable-length digests need an explicit length and cannot back a fixed fingerprint.
SUPPORTED_HASH_ALGORITHMS = frozenset(
    name for name in hashlib.algorithms_guaranteed if not name.startswith("shake_")
)

DEFAULT_UNIQUENESS_WEIGHTS = {"lexical": 0.4, "structural": 0.3, "pattern": 0.3}


class PenaltyMode(str, enum.Enum):
    POST_BLEND = "post_blend"
    PRE_BLEND = "pre_blend"


class EngineConfig(BaseModel):
    """Originality engine options. Immutable once validated."""

    # Options may be given as snake_case or camelCase; unknown keys are rejected.
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    shingle_size: int = Field(default=5, ge=1)
    min_content_length: int = Field(default=100, ge=0)
    hash_algorithm: str = "sha256"
    filter_short_tokens: bool = True
    min_token_length: int = Field(default=3, ge=1)

    exact_threshold: float = Field(default=0.95, ge=0.0, le=1.0)
    near_threshold: float = Field(default=0.85, ge=0.0, le=1.0)
    related_threshold: float = Field(default=0.30, ge=0.0, le=1.0)
    min_segment_length: int = Field(default=50, ge=1)

    exact_penalty: float = Field(default=50.0, ge=0.0)
    near_penalty: float = Field(default=10.0, ge=0.0)
    penalty_mode: PenaltyMode = PenaltyMode.POST_BLEND

    uniqueness_weights: Dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_UNIQUENESS_WEIGHTS)
    )
    max_compute_seconds: Optional[float] = Field(default=None, gt=0)

    @field_validator("hash_algorithm")
    @classmethod
    def validate_hash_algorithm(cls, v: str) -> str:
        name = str(v or "").strip().lower()
        if name not in SUPPORTED_HASH_ALGORITHMS:
            raise ValueError(
                f"Unknown hash algorithm '{v}' (expected one of {sorted(SUPPORTED_HASH_ALGORITHMS)})"
            )
        return name

    @field_validator("uniqueness_weights")
    @classmethod
    def validate_weights(cls, v: Dict[str, float]) -> Dict[str, float]:
        cleaned: Dict[str, float] = {}
        for key, raw in (v or {}).items():
            name = str(key).strip()
            if not name:
                continue
            weight = float(raw)
            if weight < 0:
                raise ValueError(f"uniqueness weight '{name}' must be >= 0")
            cleaned[name] = weight
        if sum(cleaned.values()) <= 0:
            raise ValueError("uniqueness_weights must have a positive total")
        return cleaned

    @model_validator(mode="after")
    def validate_threshold_order(self) -> "EngineConfig":
        if not self.exact_threshold > self.near_threshold:
            raise ValueError(
                f"exact_threshold ({self.exact_threshold}) must be greater than "
                f"near_threshold ({self.near_threshold})"
            )
        if not self.near_threshold > self.related_threshold:
            raise ValueError(
                f"near_threshold ({self.near_threshold}) must be greater than "
                f"related_threshold ({self.related_threshold})"
            )
        return self

    @classmethod
    def from_settings(cls, s: Settings) -> "EngineConfig":
        return cls(
            shingle_size=s.ORIGINALITY_SHINGLE_SIZE,
            min_content_length=s.ORIGINALITY_MIN_CONTENT_LENGTH,
            hash_algorithm=s.ORIGINALITY_HASH_ALGORITHM,
            filter_short_tokens=s.ORIGINALITY_FILTER_SHORT_TOKENS,
            min_token_length=s.ORIGINALITY_MIN_TOKEN_LENGTH,
            exact_threshold=s.ORIGINALITY_EXACT_THRESHOLD,
            near_threshold=s.ORIGINALITY_NEAR_THRESHOLD,
            related_threshold=s.ORIGINALITY_RELATED_THRESHOLD,
            min_segment_length=s.ORIGINALITY_MIN_SEGMENT_LENGTH,
            exact_penalty=s.ORIGINALITY_EXACT_PENALTY,
            near_penalty=s.ORIGINALITY_NEAR_PENALTY,
            penalty_mode=s.ORIGINALITY_PENALTY_MODE,
            max_compute_seconds=s.ORIGINALITY_MAX_COMPUTE_S,
        )

    @property
    def effective_min_token_length(self) -> int:
        return self.min_token_length if self.filter_short_tokens else 1
