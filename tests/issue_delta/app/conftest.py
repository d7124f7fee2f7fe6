"""Shared fixtures for app-level tests."""
import json
import os

import pytest

from issue_delta.app.config import AppConfig, DirectoryConfig, ExplanationConfig, LLMConfig


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    """Drop ISSUE_DELTA_* settings from the developer's shell and point home at tmp_path."""
    for key in list(os.environ):
        if key.startswith("ISSUE_DELTA_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("ISSUE_DELTA_DIRECTORIES__HOME", str(tmp_path))
    yield


@pytest.fixture
def app_config(tmp_path):
    return AppConfig(directories=DirectoryConfig(home=tmp_path))


@pytest.fixture
def polishing_config(tmp_path):
    return AppConfig(
        directories=DirectoryConfig(home=tmp_path),
        llm=LLMConfig(api_key="sk-test", provider_name="openai", model_name="gpt-5"),
        explanation=ExplanationConfig(timeout_seconds=5.0),
    )


def report(*issues, summary=None) -> str:
    doc = {"issues": [
        {"issueCode": code, "severity": severity, "complexity": complexity}
        for code, severity, complexity in issues
    ]}
    if summary is not None:
        doc["summary"] = summary
    return json.dumps(doc)


@pytest.fixture
def make_report():
    return report
