from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class IssueCode(str, Enum):
    NESTED_LOOP = "NESTED_LOOP"
    UNUSED_VARIABLE = "UNUSED_VARIABLE"
    MAGIC_NUMBER = "MAGIC_NUMBER"
    LONG_FUNCTION = "LONG_FUNCTION"
    DUPLICATE_CODE = "DUPLICATE_CODE"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Complexity(str, Enum):
    O_1 = "O_1"
    O_N = "O_n"
    O_N2 = "O_n2"


class ChangeType(str, Enum):
    IMPROVED = "IMPROVED"
    UNCHANGED = "UNCHANGED"
    WORSENED = "WORSENED"


@dataclass(frozen=True)
class Issue:
    """One code-quality finding produced for a single snapshot."""
    issue_code: IssueCode
    severity: Severity
    complexity: Complexity
    function_name: str | None = None
    start_line: int | None = None
    end_line: int | None = None
    before_snippet: str | None = None
    after_snippet: str | None = None


@dataclass(frozen=True)
class AnalysisSnapshot:
    """Immutable set of issues produced for one uploaded version.

    Created once when analysis completes and never edited afterwards.
    """
    version_id: str
    uploaded_at: datetime
    issues: tuple[Issue, ...]
    created_at: datetime
    summary: str | None = None


@dataclass(frozen=True)
class MatchedPair:
    before: Issue | None
    after: Issue | None

    def __post_init__(self) -> None:
        if self.before is None and self.after is None:
            raise ValueError("MatchedPair requires at least one side")

    @property
    def issue_code(self) -> IssueCode:
        side = self.before if self.before is not None else self.after
        assert side is not None
        return side.issue_code


@dataclass(frozen=True)
class ResultEntry:
    issue_code: IssueCode
    change_type: ChangeType
    before_severity: Severity | None = None
    after_severity: Severity | None = None
    before_complexity: Complexity | None = None
    after_complexity: Complexity | None = None


@dataclass(frozen=True)
class Comparison:
    """Persisted verdicts between two ordered snapshots.

    At most one Comparison exists per ordered (from_version_id, to_version_id).
    """
    comparison_id: str
    from_version_id: str
    to_version_id: str
    results: tuple[ResultEntry, ...]
    created_at: datetime


@dataclass(frozen=True)
class Explanation:
    comparison_id: str
    content: str
    facts: str
    polished: bool
    created_at: datetime
