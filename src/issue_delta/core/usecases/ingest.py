from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from ..domain.exceptions import AnalysisAlreadyExistsError
from ..domain.models import AnalysisSnapshot
from ..ports import LoggerPort, SnapshotStorePort
from ..services import IssueValidator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IngestAnalysisUseCase:
    """Use case for recording the producer's analysis of one version.

    Validates the untrusted report and stores it as an immutable snapshot.
    A version can be analyzed only once.
    """

    def __init__(
        self,
        *,
        snapshots: SnapshotStorePort,
        validator: IssueValidator,
        logger: LoggerPort,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._snapshots = snapshots
        self._validator = validator
        self._logger = logger
        self._clock = clock

    def execute(
        self,
        *,
        version_id: str,
        report_text: str,
        uploaded_at: datetime | None = None,
    ) -> AnalysisSnapshot:
        """Execute ingestion.

        Args:
            version_id: Version identifier
            report_text: Raw producer output (JSON, optionally wrapped in markdown)
            uploaded_at: Upload time of the version; defaults to now

        Returns:
            Stored snapshot

        Raises:
            AnalysisAlreadyExistsError: If the version already has a snapshot
            InvalidReportError: If the report holds no issue list
        """
        if self._snapshots.load(version_id) is not None:
            raise AnalysisAlreadyExistsError(version_id)

        report = self._validator.parse_report(report_text)

        now = self._clock()
        if uploaded_at is None:
            uploaded_at = now
        elif uploaded_at.tzinfo is None:
            uploaded_at = uploaded_at.replace(tzinfo=timezone.utc)

        snapshot = AnalysisSnapshot(
            version_id=version_id,
            uploaded_at=uploaded_at,
            issues=report.issues,
            created_at=now,
            summary=report.summary,
        )
        if not self._snapshots.create(snapshot):
            raise AnalysisAlreadyExistsError(version_id)

        self._logger.info(
            "snapshot_ingested",
            type="snapshot_ingested",
            version_id=version_id,
            issue_count=len(report.issues),
            rejected_count=len(report.rejected),
        )
        return snapshot
