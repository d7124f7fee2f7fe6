"""Tests for Pydantic BaseSettings configuration."""
from pathlib import Path

import pytest
from pydantic import ValidationError

from issue_delta.app.config import (
    AppConfig,
    DirectoryConfig,
    ExplanationConfig,
    LLMConfig,
    LoggingConfig,
)


def test_directory_config_computed_paths(tmp_path):
    """Computed paths live under home and are created on access."""
    config = DirectoryConfig(home=tmp_path)

    assert config.snapshots_dir == tmp_path / "data" / "snapshots"
    assert config.comparisons_dir == tmp_path / "data" / "comparisons"
    assert config.explanations_dir == tmp_path / "data" / "explanations"
    assert config.logs_dir == tmp_path / "logs"

    for path in (config.snapshots_dir, config.comparisons_dir, config.explanations_dir, config.logs_dir):
        assert isinstance(path, Path)
        assert path.exists()


def test_home_comes_from_prefixed_env(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", "/should/not/be/used")
    monkeypatch.setenv("ISSUE_DELTA_DIRECTORIES__HOME", str(tmp_path / "custom"))

    assert AppConfig().directories.home == tmp_path / "custom"


def test_llm_config_defaults():
    config = LLMConfig()

    assert config.api_key is None
    assert config.provider_name == "openai"
    assert config.model_name == "gpt-5"
    assert config.max_output_tokens == 800


def test_explanation_and_logging_defaults():
    assert ExplanationConfig().polish_enabled is True
    assert ExplanationConfig().timeout_seconds == 20.0
    assert LoggingConfig().level == "INFO"
    assert LoggingConfig().console_output is False


def test_nested_env_vars(monkeypatch):
    monkeypatch.setenv("ISSUE_DELTA_LLM__API_KEY", "sk-env")
    monkeypatch.setenv("ISSUE_DELTA_LLM__PROVIDER_NAME", "anthropic")
    monkeypatch.setenv("ISSUE_DELTA_EXPLANATION__TIMEOUT_SECONDS", "3.5")
    monkeypatch.setenv("ISSUE_DELTA_EXPLANATION__POLISH_ENABLED", "false")

    config = AppConfig()

    assert config.llm.api_key == "sk-env"
    assert config.llm.provider_name == "anthropic"
    assert config.explanation.timeout_seconds == 3.5
    assert config.explanation.polish_enabled is False


def test_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        ExplanationConfig(timeout_seconds=0)


def test_app_config_is_frozen(app_config):
    with pytest.raises(ValidationError):
        app_config.llm = LLMConfig(api_key="x")


def test_unknown_provider_fails_at_load(monkeypatch):
    monkeypatch.setenv("ISSUE_DELTA_LLM__PROVIDER_NAME", "mistral")

    with pytest.raises(ValidationError):
        LLMConfig()
