from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import typer
from dotenv import load_dotenv
from pydantic import ValidationError

from .config import AppConfig
from .container import Container
from .cli_formatter import format_comparison, format_explanation, format_snapshot
from ..core.domain.exceptions import (
    AnalysisAlreadyExistsError,
    ComparisonNotFoundError,
    InvalidIdError,
    InvalidReportError,
    PreconditionError,
)
from ..infra.serialization import comparison_to_wire, explanation_to_wire, snapshot_to_wire

load_dotenv()

app = typer.Typer(add_completion=False, no_args_is_help=True)

# Errors caused by the request itself; reported without a traceback.
_REQUEST_ERRORS = (
    PreconditionError,
    AnalysisAlreadyExistsError,
    InvalidReportError,
    ComparisonNotFoundError,
    InvalidIdError,
)


def _create_container() -> Container:
    try:
        config = AppConfig()
    except ValidationError as e:
        typer.echo(f"Error: invalid configuration\n{e}", err=True)
        raise typer.Exit(code=2)

    container = Container()
    container.config.from_pydantic(config)
    container.init_resources()
    return container


def _echo_json(payload: object) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def _parse_uploaded_at(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"not an ISO-8601 timestamp: {value}", param_hint="--uploaded-at")


@app.command()
def ingest(
    version_id: str = typer.Argument(..., help="Version identifier"),
    report_file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Analysis report (JSON)"),
    uploaded_at: str | None = typer.Option(None, "--uploaded-at", help="Upload time of the version (ISO-8601), defaults to now"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
):
    """Record the analysis report of one version. Each version can be ingested once."""
    uploaded = _parse_uploaded_at(uploaded_at)
    report_text = report_file.read_text(encoding="utf-8")

    container = _create_container()
    try:
        uc = container.ingest_uc()
        snapshot = uc.execute(version_id=version_id, report_text=report_text, uploaded_at=uploaded)

        if json_output:
            _echo_json(snapshot_to_wire(snapshot))
        else:
            typer.echo(format_snapshot(snapshot))

    except _REQUEST_ERRORS as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    finally:
        # Always shutdown resources to close file handles
        container.shutdown_resources()


@app.command()
def analysis(
    version_id: str = typer.Argument(..., help="Version identifier"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
):
    """Show the stored analysis of a version."""
    container = _create_container()
    try:
        snapshot = container.show_analysis_uc().execute(version_id)

        if json_output:
            _echo_json(snapshot_to_wire(snapshot))
        else:
            typer.echo(format_snapshot(snapshot))

    except _REQUEST_ERRORS as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    finally:
        container.shutdown_resources()


@app.command()
def compare(
    from_version: str = typer.Argument(..., help="Earlier version"),
    to_version: str = typer.Argument(..., help="Later version"),
    auto_order: bool = typer.Option(False, "--auto-order", help="Order the two versions by upload time"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
):
    """Compare the issues of two analyzed versions.

    The first version must have been uploaded before the second one, unless
    --auto-order is given. Comparing the same pair again returns the stored
    comparison.
    """
    container = _create_container()
    try:
        uc = container.compare_uc()
        if auto_order:
            from_version, to_version = uc.order(from_version, to_version)
        comparison = uc.execute(from_version_id=from_version, to_version_id=to_version)

        if json_output:
            _echo_json(comparison_to_wire(comparison))
        else:
            typer.echo(format_comparison(comparison))

    except _REQUEST_ERRORS as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    finally:
        container.shutdown_resources()


@app.command()
def show(
    comparison_id: str = typer.Argument(..., help="Comparison identifier"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
):
    """Show a stored comparison and its explanation, if one was generated."""
    container = _create_container()
    try:
        comparison, explanation = container.show_comparison_uc().execute(comparison_id)

        if json_output:
            _echo_json({
                "comparison": comparison_to_wire(comparison),
                "explanation": explanation_to_wire(explanation) if explanation else None,
            })
        else:
            typer.echo(format_comparison(comparison))
            if explanation is not None:
                typer.echo(format_explanation(explanation))

    except _REQUEST_ERRORS as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    finally:
        container.shutdown_resources()


@app.command()
def explain(
    comparison_id: str = typer.Argument(..., help="Comparison identifier"),
    no_polish: bool = typer.Option(False, "--no-polish", help="Use the deterministic facts without LLM rephrasing"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
):
    """Explain a comparison in natural language.

    The explanation is generated once and cached; later calls return it unchanged.
    """
    container = _create_container()
    try:
        uc = container.explain_uc()
        explanation = uc.execute(comparison_id=comparison_id, polish=not no_polish)

        if json_output:
            _echo_json(explanation_to_wire(explanation))
        else:
            typer.echo(format_explanation(explanation))

    except _REQUEST_ERRORS as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    finally:
        container.shutdown_resources()


if __name__ == "__main__":
    app()
