"""Centralised settings — reads .env / env vars via pydantic-settings."""
from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide defaults for the originality engine, sourced from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── App ──
    APP_ENV: str = "development"
    APP_LOG_LEVEL: str = "INFO"

    # ── Fingerprinting ──
    ORIGINALITY_SHINGLE_SIZE: int = 5
    ORIGINALITY_MIN_CONTENT_LENGTH: int = 100
    ORIGINALITY_HASH_ALGORITHM: str = "sha256"
    ORIGINALITY_FILTER_SHORT_TOKENS: bool = True
    ORIGINALITY_MIN_TOKEN_LENGTH: int = 3

    # ── Similarity thresholds ──
    ORIGINALITY_EXACT_THRESHOLD: float = 0.95
    ORIGINALITY_NEAR_THRESHOLD: float = 0.85
    ORIGINALITY_RELATED_THRESHOLD: float = 0.30
    ORIGINALITY_MIN_SEGMENT_LENGTH: int = 50

    # ── Score penalties ──
    ORIGINALITY_EXACT_PENALTY: float = 50.0
    ORIGINALITY_NEAR_PENALTY: float = 10.0
    ORIGINALITY_PENALTY_MODE: str = "post_blend"

    # ── Per-page compute budget (seconds, unset = unbounded) ──
    ORIGINALITY_MAX_COMPUTE_S: Optional[float] = None


settings = Settings()
