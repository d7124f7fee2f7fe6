from issue_delta.app.config import AppConfig, DirectoryConfig, ExplanationConfig, LLMConfig
from issue_delta.app.container import Container, build_polisher
from issue_delta.infra.llm import LLM

from fakes import FakeLogger


def _container(config):
    container = Container()
    container.config.from_pydantic(config)
    container.init_resources()
    return container


def test_build_polisher_requires_key_and_flag():
    common = dict(provider="openai", model="gpt-5", timeout=1.0, max_output_tokens=100, logger=FakeLogger())

    assert build_polisher(enabled=True, api_key=None, **common) is None
    assert build_polisher(enabled=False, api_key="sk", **common) is None
    assert isinstance(build_polisher(enabled=True, api_key="sk", **common), LLM)


def test_container_wires_use_cases(app_config):
    container = _container(app_config)
    try:
        assert container.polisher() is None
        assert container.ingest_uc() is not None
        assert container.compare_uc() is not None
        assert container.explain_uc() is not None
        assert container.snapshots() is container.snapshots()
    finally:
        container.shutdown_resources()


def test_container_selects_llm_polisher_when_configured(tmp_path):
    config = AppConfig(
        directories=DirectoryConfig(home=tmp_path),
        llm=LLMConfig(api_key="sk-test", provider_name="anthropic", model_name="claude-sonnet-4-5"),
        explanation=ExplanationConfig(timeout_seconds=2.0),
    )
    container = _container(config)
    try:
        polisher = container.polisher()
        assert isinstance(polisher, LLM)
        assert polisher._provider == "anthropic"
        assert polisher._timeout == 2.0
    finally:
        container.shutdown_resources()


def test_logger_writes_under_logs_dir(app_config):
    container = _container(app_config)
    try:
        container.logger().info("container_ready", type="container_ready")
    finally:
        container.shutdown_resources()

    assert (app_config.directories.logs_dir / "issue_delta.jsonl").read_text(encoding="utf-8").strip()
