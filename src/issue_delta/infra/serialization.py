"""Wire (camelCase JSON) representation of domain records."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from ..core.domain.models import (
    AnalysisSnapshot,
    ChangeType,
    Comparison,
    Complexity,
    Explanation,
    Issue,
    IssueCode,
    ResultEntry,
    Severity,
)


def _value(member) -> Optional[str]:
    return member.value if member is not None else None


def _severity(raw: Optional[str]) -> Optional[Severity]:
    return Severity(raw) if raw is not None else None


def _complexity(raw: Optional[str]) -> Optional[Complexity]:
    return Complexity(raw) if raw is not None else None


def issue_to_wire(issue: Issue) -> dict[str, Any]:
    return {
        "issueCode": issue.issue_code.value,
        "severity": issue.severity.value,
        "complexity": issue.complexity.value,
        "functionName": issue.function_name,
        "startLine": issue.start_line,
        "endLine": issue.end_line,
        "beforeSnippet": issue.before_snippet,
        "afterSnippet": issue.after_snippet,
    }


def issue_from_wire(data: dict[str, Any]) -> Issue:
    return Issue(
        issue_code=IssueCode(data["issueCode"]),
        severity=Severity(data["severity"]),
        complexity=Complexity(data["complexity"]),
        function_name=data.get("functionName"),
        start_line=data.get("startLine"),
        end_line=data.get("endLine"),
        before_snippet=data.get("beforeSnippet"),
        after_snippet=data.get("afterSnippet"),
    )


def snapshot_to_wire(snapshot: AnalysisSnapshot) -> dict[str, Any]:
    return {
        "versionId": snapshot.version_id,
        "uploadedAt": snapshot.uploaded_at.isoformat(),
        "createdAt": snapshot.created_at.isoformat(),
        "summary": snapshot.summary,
        "issues": [issue_to_wire(i) for i in snapshot.issues],
    }


def snapshot_from_wire(data: dict[str, Any]) -> AnalysisSnapshot:
    return AnalysisSnapshot(
        version_id=data["versionId"],
        uploaded_at=datetime.fromisoformat(data["uploadedAt"]),
        created_at=datetime.fromisoformat(data["createdAt"]),
        summary=data.get("summary"),
        issues=tuple(issue_from_wire(i) for i in data.get("issues", [])),
    )


def entry_to_wire(entry: ResultEntry) -> dict[str, Any]:
    return {
        "issueCode": entry.issue_code.value,
        "changeType": entry.change_type.value,
        "beforeSeverity": _value(entry.before_severity),
        "afterSeverity": _value(entry.after_severity),
        "beforeComplexity": _value(entry.before_complexity),
        "afterComplexity": _value(entry.after_complexity),
    }


def entry_from_wire(data: dict[str, Any]) -> ResultEntry:
    return ResultEntry(
        issue_code=IssueCode(data["issueCode"]),
        change_type=ChangeType(data["changeType"]),
        before_severity=_severity(data.get("beforeSeverity")),
        after_severity=_severity(data.get("afterSeverity")),
        before_complexity=_complexity(data.get("beforeComplexity")),
        after_complexity=_complexity(data.get("afterComplexity")),
    )


def comparison_to_wire(comparison: Comparison) -> dict[str, Any]:
    return {
        "id": comparison.comparison_id,
        "fromVersionId": comparison.from_version_id,
        "toVersionId": comparison.to_version_id,
        "createdAt": comparison.created_at.isoformat(),
        "results": [entry_to_wire(e) for e in comparison.results],
    }


def comparison_from_wire(data: dict[str, Any]) -> Comparison:
    return Comparison(
        comparison_id=data["id"],
        from_version_id=data["fromVersionId"],
        to_version_id=data["toVersionId"],
        created_at=datetime.fromisoformat(data["createdAt"]),
        results=tuple(entry_from_wire(e) for e in data.get("results", [])),
    )


def explanation_to_wire(explanation: Explanation) -> dict[str, Any]:
    return {
        "comparisonId": explanation.comparison_id,
        "content": explanation.content,
        "facts": explanation.facts,
        "polished": explanation.polished,
        "createdAt": explanation.created_at.isoformat(),
    }


def explanation_from_wire(data: dict[str, Any]) -> Explanation:
    return Explanation(
        comparison_id=data["comparisonId"],
        content=data["content"],
        facts=data["facts"],
        polished=bool(data.get("polished", False)),
        created_at=datetime.fromisoformat(data["createdAt"]),
    )
