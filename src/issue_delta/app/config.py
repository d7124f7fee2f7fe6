from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..infra.llm_adapters import Provider


APP_NAME = "issue_delta"
ENV_PREFIX = "ISSUE_DELTA_"


def _default_home() -> Path:
    """Get default home directory using platformdirs."""
    return Path(PlatformDirs(appname=APP_NAME, appauthor=False).user_data_dir)


class DirectoryConfig(BaseSettings):
    """Directory configuration with computed paths."""

    model_config = SettingsConfigDict(env_prefix=f"{ENV_PREFIX}DIRECTORIES__")

    home: Path = Field(
        default_factory=_default_home,
        description="Base directory for all issue_delta data",
    )

    @computed_field
    @property
    def snapshots_dir(self) -> Path:
        """Immutable analysis snapshots, one file per version."""
        path = self.home / "data" / "snapshots"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @computed_field
    @property
    def comparisons_dir(self) -> Path:
        path = self.home / "data" / "comparisons"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @computed_field
    @property
    def explanations_dir(self) -> Path:
        path = self.home / "data" / "explanations"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @computed_field
    @property
    def logs_dir(self) -> Path:
        path = self.home / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path


class LLMConfig(BaseSettings):
    """LLM configuration for explanation polishing."""

    model_config = SettingsConfigDict(env_prefix=f"{ENV_PREFIX}LLM__")

    api_key: str | None = Field(
        default=None,
        description="LLM API key (OpenAI or Anthropic). Without it explanations are not polished.",
    )

    provider_name: Provider = Field(
        default="openai",
        description="LLM provider (openai, anthropic)",
    )

    model_name: str = Field(
        default="gpt-5",
        description="LLM model name",
    )

    max_output_tokens: int = Field(
        default=800,
        description="Upper bound on polished explanation length in tokens",
    )


class ExplanationConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix=f"{ENV_PREFIX}EXPLANATION__")

    polish_enabled: bool = Field(
        default=True,
        description="Ask the LLM to rephrase the deterministic facts",
    )

    timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Upper bound for the polish call; the facts are used verbatim past it",
    )


class LoggingConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix=f"{ENV_PREFIX}LOGGING__")

    logger_name: str = Field(default="issue_delta")
    log_file_name: str = Field(default="issue_delta.jsonl")
    level: str = Field(default="INFO")
    console_output: bool = Field(default=False)


class AppConfig(BaseSettings):
    """Root application configuration.

    All configuration is loaded from environment variables with ISSUE_DELTA_ prefix.
    Use double underscore for nested config: ISSUE_DELTA_LLM__API_KEY

    Example env vars:
        export ISSUE_DELTA_LLM__API_KEY=sk-xxxxxxxxxxxxx
        export ISSUE_DELTA_LLM__PROVIDER_NAME=anthropic
        export ISSUE_DELTA_LLM__MODEL_NAME=claude-sonnet-4-5
        export ISSUE_DELTA_EXPLANATION__TIMEOUT_SECONDS=10
        export ISSUE_DELTA_DIRECTORIES__HOME=/custom/path
        export ISSUE_DELTA_LOGGING__LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        frozen=True,
        extra="forbid",
    )

    directories: DirectoryConfig = Field(default_factory=DirectoryConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    explanation: ExplanationConfig = Field(default_factory=ExplanationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
