"""Wire shape of persisted and printed records."""
from datetime import datetime, timezone

from issue_delta.core.domain.models import ChangeType, Comparison, Complexity, IssueCode, ResultEntry, Severity
from issue_delta.infra.serialization import (
    comparison_from_wire,
    comparison_to_wire,
    entry_to_wire,
    issue_from_wire,
)

T = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def test_new_issue_entry_has_null_before_fields():
    entry = ResultEntry(
        issue_code=IssueCode.MAGIC_NUMBER,
        change_type=ChangeType.WORSENED,
        after_severity=Severity.LOW,
        after_complexity=Complexity.O_1,
    )

    assert entry_to_wire(entry) == {
        "issueCode": "MAGIC_NUMBER",
        "changeType": "WORSENED",
        "beforeSeverity": None,
        "afterSeverity": "low",
        "beforeComplexity": None,
        "afterComplexity": "O_1",
    }


def test_comparison_wire_keys():
    comparison = Comparison(comparison_id="abc", from_version_id="v1", to_version_id="v2", results=(), created_at=T)

    wire = comparison_to_wire(comparison)

    assert wire == {
        "id": "abc",
        "fromVersionId": "v1",
        "toVersionId": "v2",
        "createdAt": "2024-05-01T12:00:00+00:00",
        "results": [],
    }
    assert comparison_from_wire(wire) == comparison


def test_issue_optional_fields_default_to_none():
    issue = issue_from_wire({"issueCode": "LONG_FUNCTION", "severity": "medium", "complexity": "O_n"})

    assert issue.function_name is None
    assert issue.start_line is None
