from __future__ import annotations

import logging

import pytest
from pythonjsonlogger.json import JsonFormatter

from originality.config import Settings
from originality.logging_config import setup_logging
from originality.schemas.engine_config import EngineConfig, PenaltyMode


def _base_config(**overrides):
    payload = {
        "shingle_size": 5,
        "min_content_length": 100,
        "hash_algorithm": "sha256",
        "exact_threshold": 0.95,
        "near_threshold": 0.85,
        "related_threshold": 0.30,
        "exact_penalty": 50,
        "near_penalty": 10,
    }
    payload.update(overrides)
    return payload


def test_defaults_match_documented_values() -> None:
    config = EngineConfig()
    assert config.shingle_size == 5
    assert config.min_content_length == 100
    assert config.hash_algorithm == "sha256"
    assert (config.exact_threshold, config.near_threshold, config.related_threshold) == (0.95, 0.85, 0.30)
    assert config.penalty_mode == PenaltyMode.POST_BLEND
    assert config.uniqueness_weights == {"lexical": 0.4, "structural": 0.3, "pattern": 0.3}
    assert config.max_compute_seconds is None


def test_thresholds_must_be_strictly_ordered() -> None:
    with pytest.raises(ValueError):
        EngineConfig(**_base_config(exact_threshold=0.8, near_threshold=0.85))
    with pytest.raises(ValueError):
        EngineConfig(**_base_config(near_threshold=0.3, related_threshold=0.3))
    with pytest.raises(ValueError):
        EngineConfig(**_base_config(exact_threshold=1.2))


def test_hash_algorithm_is_validated_and_normalized() -> None:
    assert EngineConfig(**_base_config(hash_algorithm=" SHA512 ")).hash_algorithm == "sha512"
    with pytest.raises(ValueError):
        EngineConfig(**_base_config(hash_algorithm="crc32"))
    with pytest.raises(ValueError):
        EngineConfig(**_base_config(hash_algorithm="shake_128"))


def test_shingle_size_and_weights_are_bounded() -> None:
    with pytest.raises(ValueError):
        EngineConfig(**_base_config(shingle_size=0))
    with pytest.raises(ValueError):
        EngineConfig(**_base_config(uniqueness_weights={"lexical": -1.0}))
    with pytest.raises(ValueError):
        EngineConfig(**_base_config(uniqueness_weights={"lexical": 0.0}))
    with pytest.raises(ValueError):
        EngineConfig(**_base_config(max_compute_seconds=0))


def test_camel_case_option_names_are_accepted() -> None:
    config = EngineConfig.model_validate(
        {"shingleSize": 4, "hashAlgorithm": "md5", "exactThreshold": 0.97, "nearThreshold": 0.9, "nearPenalty": 5}
    )
    assert config.shingle_size == 4
    assert config.hash_algorithm == "md5"
    assert (config.exact_threshold, config.near_threshold) == (0.97, 0.9)
    assert config.near_penalty == 5.0


def test_unknown_option_names_are_rejected() -> None:
    with pytest.raises(ValueError):
        EngineConfig(**_base_config(shingel_size=2))
    with pytest.raises(ValueError):
        EngineConfig.model_validate({"near_treshold": 0.9})


def test_config_is_frozen() -> None:
    config = EngineConfig()
    with pytest.raises(ValueError):
        config.shingle_size = 7


def test_short_token_filter_toggle() -> None:
    assert EngineConfig(**_base_config(min_token_length=4)).effective_min_token_length == 4
    assert EngineConfig(**_base_config(filter_short_tokens=False)).effective_min_token_length == 1


def test_settings_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("ORIGINALITY_SHINGLE_SIZE", "7")
    monkeypatch.setenv("ORIGINALITY_HASH_ALGORITHM", "blake2b")
    monkeypatch.setenv("ORIGINALITY_PENALTY_MODE", "pre_blend")
    monkeypatch.setenv("ORIGINALITY_MAX_COMPUTE_S", "2.5")

    config = EngineConfig.from_settings(Settings())
    assert config.shingle_size == 7
    assert config.hash_algorithm == "blake2b"
    assert config.penalty_mode == PenaltyMode.PRE_BLEND
    assert config.max_compute_seconds == 2.5


def test_setup_logging_installs_json_formatter() -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging("WARNING")
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
