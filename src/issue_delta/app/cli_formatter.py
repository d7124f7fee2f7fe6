"""CLI output formatting utilities for human-readable display."""

from __future__ import annotations

from collections import Counter

from ..core.domain.models import AnalysisSnapshot, ChangeType, Comparison, Explanation, ResultEntry


def _value(member) -> str:
    return member.value if member is not None else "-"


def _format_entry(entry: ResultEntry) -> str:
    severity = f"{_value(entry.before_severity)} -> {_value(entry.after_severity)}"
    complexity = f"{_value(entry.before_complexity)} -> {_value(entry.after_complexity)}"
    return f"  {entry.change_type.value:<10} {entry.issue_code.value:<16} severity {severity:<16} complexity {complexity}"


def format_snapshot(snapshot: AnalysisSnapshot) -> str:
    """Format a stored analysis snapshot for human-readable CLI output.

    Args:
        snapshot: Analysis snapshot

    Returns:
        Formatted string for display
    """
    lines = []
    lines.append("=" * 80)
    lines.append("ANALYSIS")
    lines.append("=" * 80)

    lines.append(f"\nVersion: {snapshot.version_id}")
    lines.append(f"Uploaded: {snapshot.uploaded_at.isoformat()}")
    lines.append(f"Issues: {len(snapshot.issues)}")

    if snapshot.summary:
        lines.append(f"\nSummary:\n{snapshot.summary}")

    if snapshot.issues:
        lines.append("\n" + "-" * 80)
        lines.append("ISSUES")
        lines.append("-" * 80)
        for i, issue in enumerate(snapshot.issues, 1):
            location = ""
            if issue.function_name:
                location = f" in {issue.function_name}"
            if issue.start_line is not None:
                end = issue.end_line if issue.end_line is not None else issue.start_line
                location += f" (lines {issue.start_line}-{end})"
            lines.append(
                f"  {i}. {issue.issue_code.value} "
                f"[{issue.severity.value}, {issue.complexity.value}]{location}"
            )

    lines.append("\n" + "=" * 80)

    return "\n".join(lines)


def format_comparison(comparison: Comparison) -> str:
    """Format a comparison and its per-issue results."""
    lines = []
    lines.append("=" * 80)
    lines.append("COMPARISON")
    lines.append("=" * 80)

    lines.append(f"\nComparison ID: {comparison.comparison_id}")
    lines.append(f"From: {comparison.from_version_id} | To: {comparison.to_version_id}")

    counts = Counter(entry.change_type for entry in comparison.results)
    lines.append(
        " | ".join(f"{change_type.value}: {counts.get(change_type, 0)}" for change_type in ChangeType)
    )

    lines.append("\n" + "-" * 80)
    lines.append("RESULTS")
    lines.append("-" * 80)

    if not comparison.results:
        lines.append("\nNo issues in either version.")
    for entry in comparison.results:
        lines.append(_format_entry(entry))

    lines.append("\n" + "=" * 80)

    return "\n".join(lines)


def format_explanation(explanation: Explanation) -> str:
    lines = []
    lines.append("=" * 80)
    lines.append("EXPLANATION")
    lines.append("=" * 80)

    lines.append(f"\nComparison ID: {explanation.comparison_id}")
    lines.append(f"Source: {'polished' if explanation.polished else 'facts'}")
    lines.append("")
    lines.append(explanation.content.rstrip("\n"))

    lines.append("\n" + "=" * 80)

    return "\n".join(lines)
