from __future__ import annotations

from datetime import datetime

from .config import AppConfig
from .container import Container
from ..core.domain.models import AnalysisSnapshot, Comparison, Explanation


def _create_container(config: AppConfig | None = None) -> Container:
    """Create and initialize a container.

    Args:
        config: Optional config. If None, loads from environment variables.

    Returns:
        Initialized container instance
    """
    container = Container()

    if config is None:
        # Load from environment variables (BaseSettings default behavior)
        config = AppConfig()

    container.config.from_pydantic(config)
    container.init_resources()

    return container


def ingest(
    version_id: str,
    report_text: str,
    *,
    uploaded_at: datetime | None = None,
    config: AppConfig | None = None,
) -> AnalysisSnapshot:
    """Record the analysis report of one version.

    Args:
        version_id: Version identifier
        report_text: Producer output (JSON document, markdown fences allowed)
        uploaded_at: Upload time of the version; defaults to now
        config: Optional config for testing. If None, loads from env vars.

    Returns:
        Stored snapshot with the issues that passed validation

    Raises:
        AnalysisAlreadyExistsError: If the version was already ingested
        InvalidReportError: If the report holds no issue list
    """
    container = _create_container(config)
    try:
        uc = container.ingest_uc()
        return uc.execute(version_id=version_id, report_text=report_text, uploaded_at=uploaded_at)
    finally:
        container.shutdown_resources()


def compare(
    from_version_id: str,
    to_version_id: str,
    *,
    auto_order: bool = False,
    config: AppConfig | None = None,
) -> Comparison:
    """Compare two analyzed versions, reusing the stored comparison if any.

    Args:
        from_version_id: Earlier version
        to_version_id: Later version
        auto_order: Order the two versions by upload time instead of
            rejecting a reversed pair
        config: Optional config for testing. If None, loads from env vars.

    Raises:
        PreconditionError: If the versions are identical, missing, or out of order
    """
    container = _create_container(config)
    try:
        uc = container.compare_uc()
        if auto_order:
            from_version_id, to_version_id = uc.order(from_version_id, to_version_id)
        return uc.execute(from_version_id=from_version_id, to_version_id=to_version_id)
    finally:
        container.shutdown_resources()


def get_analysis(version_id: str, config: AppConfig | None = None) -> AnalysisSnapshot:
    container = _create_container(config)
    try:
        return container.show_analysis_uc().execute(version_id)
    finally:
        container.shutdown_resources()


def get_comparison(comparison_id: str, config: AppConfig | None = None) -> Comparison:
    container = _create_container(config)
    try:
        comparison, _ = container.show_comparison_uc().execute(comparison_id)
        return comparison
    finally:
        container.shutdown_resources()


def explain(
    comparison_id: str,
    *,
    polish: bool = True,
    config: AppConfig | None = None,
) -> Explanation:
    """Return the explanation of a comparison, generating it on first request.

    Args:
        comparison_id: Comparison identifier
        polish: Allow the LLM to rephrase the facts (only when an API key is configured)
        config: Optional config for testing. If None, loads from env vars.

    Raises:
        ComparisonNotFoundError: If no comparison has this id
    """
    container = _create_container(config)
    try:
        uc = container.explain_uc()
        return uc.execute(comparison_id=comparison_id, polish=polish)
    finally:
        container.shutdown_resources()


def get_explanation(comparison_id: str, config: AppConfig | None = None) -> Explanation | None:
    """Return the stored explanation without generating one."""
    container = _create_container(config)
    try:
        _, explanation = container.show_comparison_uc().execute(comparison_id)
        return explanation
    finally:
        container.shutdown_resources()
