from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..domain.exceptions import InvalidReportError
from ..domain.models import Complexity, Issue, IssueCode, Severity
from ..ports import LoggerPort
from .json_extractor import JsonExtractor


class IssuePayload(BaseModel):
    """Wire schema of one issue as emitted by the analysis producer."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    issue_code: IssueCode = Field(alias="issueCode")
    severity: Severity
    complexity: Complexity
    function_name: Optional[str] = Field(default=None, alias="functionName")
    start_line: Optional[int] = Field(default=None, alias="startLine", ge=0)
    end_line: Optional[int] = Field(default=None, alias="endLine", ge=0)
    before_snippet: Optional[str] = Field(default=None, alias="beforeSnippet")
    after_snippet: Optional[str] = Field(default=None, alias="afterSnippet")

    @model_validator(mode="after")
    def _check_line_range(self) -> "IssuePayload":
        if self.start_line is not None and self.end_line is not None and self.end_line < self.start_line:
            raise ValueError("endLine must not be before startLine")
        return self

    def to_issue(self) -> Issue:
        function_name = self.function_name.strip() if self.function_name else None
        return Issue(
            issue_code=self.issue_code,
            severity=self.severity,
            complexity=self.complexity,
            function_name=function_name or None,
            start_line=self.start_line,
            end_line=self.end_line,
            before_snippet=self.before_snippet,
            after_snippet=self.after_snippet,
        )


@dataclass
class RejectedIssue:
    index: int
    errors: list[str]


@dataclass
class ValidatedReport:
    issues: tuple[Issue, ...]
    summary: str | None = None
    rejected: list[RejectedIssue] = field(default_factory=list)


class IssueValidator:
    """Validates untrusted producer output at the ingestion boundary.

    Issues with out-of-domain values are excluded and logged; the rest of
    the report is kept so one producer anomaly does not block ingestion.
    """

    def __init__(self, *, json_extractor: JsonExtractor, logger: LoggerPort) -> None:
        self._json_extractor = json_extractor
        self._logger = logger

    def parse_report(self, raw_text: str) -> ValidatedReport:
        """Parse a raw producer document (possibly wrapped in markdown).

        Raises:
            InvalidReportError: If the text holds no JSON object or list of issues
        """
        extracted = self._json_extractor.extract(raw_text)
        try:
            document = json.loads(extracted)
        except json.JSONDecodeError as e:
            raise InvalidReportError(f"Producer output is not valid JSON: {e.msg}") from e
        return self.validate_document(document)

    def validate_document(self, document: Any) -> ValidatedReport:
        summary: str | None = None
        if isinstance(document, dict):
            raw_issues = document.get("issues")
            raw_summary = document.get("summary")
            if isinstance(raw_summary, str):
                summary = raw_summary
        else:
            raw_issues = document

        if not isinstance(raw_issues, list):
            raise InvalidReportError("Producer output must contain a list of issues")

        issues, rejected = self.validate_issues(raw_issues)
        return ValidatedReport(issues=issues, summary=summary, rejected=rejected)

    def validate_issues(self, raw_issues: list[Any]) -> tuple[tuple[Issue, ...], list[RejectedIssue]]:
        issues: list[Issue] = []
        rejected: list[RejectedIssue] = []

        for index, raw in enumerate(raw_issues):
            try:
                payload = IssuePayload.model_validate(raw)
            except ValidationError as e:
                errors = [
                    f"{'.'.join(str(p) for p in err['loc']) or '<issue>'}: {err['msg']}"
                    for err in e.errors()
                ]
                rejected.append(RejectedIssue(index=index, errors=errors))
                self._logger.warning(
                    "issue_rejected",
                    type="issue_rejected",
                    index=index,
                    errors=errors,
                )
                continue
            issues.append(payload.to_issue())

        return tuple(issues), rejected
