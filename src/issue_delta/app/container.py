from __future__ import annotations

from dependency_injector import containers, providers

from ..core.ports import LoggerPort, ProsePolisherPort
from ..core.services import (
    ChangeClassifier,
    ExplanationSynthesizer,
    IssueMatcher,
    IssueValidator,
    JsonExtractor,
    ResultAggregator,
)
from ..core.usecases.compare import CompareVersionsUseCase
from ..core.usecases.explain import ExplainComparisonUseCase
from ..core.usecases.ingest import IngestAnalysisUseCase
from ..core.usecases.show import ShowAnalysisUseCase, ShowComparisonUseCase
from ..infra.comparison_store import ComparisonStore
from ..infra.explanation_store import ExplanationStore
from ..infra.llm import LLM
from ..infra.llm_adapters import Provider
from ..infra.logging import AppLogger
from ..infra.snapshot_store import SnapshotStore


def build_polisher(
    *,
    enabled: bool,
    provider: Provider,
    model: str,
    api_key: str | None,
    timeout: float,
    max_output_tokens: int,
    logger: LoggerPort,
) -> ProsePolisherPort | None:
    """Return the LLM polisher, or None when polishing is off or unconfigured."""
    if not enabled or not api_key:
        return None
    return LLM(
        provider=provider,
        model=model,
        api_key=api_key,
        logger=logger,
        timeout=timeout,
        max_output_tokens=max_output_tokens,
    )


class Container(containers.DeclarativeContainer):
    """DI container fed from AppConfig via `config.from_pydantic`."""

    config = providers.Configuration()

    # Stores
    snapshots = providers.Singleton(
        SnapshotStore,
        snapshots_dir=config.directories.snapshots_dir,
    )

    comparisons = providers.Singleton(
        ComparisonStore,
        comparisons_dir=config.directories.comparisons_dir,
    )

    explanations = providers.Singleton(
        ExplanationStore,
        explanations_dir=config.directories.explanations_dir,
    )

    # Logger (Resource: manages lifecycle with init/shutdown)
    logger = providers.Resource(
        AppLogger,
        logs_dir=config.directories.logs_dir,
        log_file_name=config.logging.log_file_name,
        logger_name=config.logging.logger_name,
        console_output=config.logging.console_output,
        level=config.logging.level,
    )

    polisher = providers.Singleton(
        build_polisher,
        enabled=config.explanation.polish_enabled,
        provider=config.llm.provider_name,
        model=config.llm.model_name,
        api_key=config.llm.api_key,
        timeout=config.explanation.timeout_seconds,
        max_output_tokens=config.llm.max_output_tokens,
        logger=logger,
    )

    # Domain services
    json_extractor = providers.Singleton(JsonExtractor)

    validator = providers.Factory(
        IssueValidator,
        json_extractor=json_extractor,
        logger=logger,
    )

    matcher = providers.Singleton(IssueMatcher)

    classifier = providers.Singleton(ChangeClassifier)

    aggregator = providers.Factory(
        ResultAggregator,
        snapshots=snapshots,
        comparisons=comparisons,
        matcher=matcher,
        classifier=classifier,
        logger=logger,
    )

    synthesizer = providers.Factory(
        ExplanationSynthesizer,
        store=explanations,
        logger=logger,
        polisher=polisher,
        timeout_seconds=config.explanation.timeout_seconds,
    )

    # Use cases
    ingest_uc = providers.Factory(
        IngestAnalysisUseCase,
        snapshots=snapshots,
        validator=validator,
        logger=logger,
    )

    compare_uc = providers.Factory(
        CompareVersionsUseCase,
        aggregator=aggregator,
        snapshots=snapshots,
    )

    explain_uc = providers.Factory(
        ExplainComparisonUseCase,
        comparisons=comparisons,
        synthesizer=synthesizer,
    )

    show_analysis_uc = providers.Factory(
        ShowAnalysisUseCase,
        snapshots=snapshots,
    )

    show_comparison_uc = providers.Factory(
        ShowComparisonUseCase,
        comparisons=comparisons,
        explanations=explanations,
    )
