from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Callable, Sequence

from ..domain.exceptions import (
    AnalysisNotFoundError,
    IdenticalVersionsError,
    VersionOrderError,
)
from ..domain.models import AnalysisSnapshot, ChangeType, Comparison, Issue, ResultEntry
from ..ports import ComparisonStorePort, LoggerPort, MatcherPort, SnapshotStorePort
from .change_classifier import ChangeClassifier


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_comparison_id() -> str:
    return uuid.uuid4().hex


class ResultAggregator:
    """Turns classifier verdicts into the persisted, idempotent Comparison.

    The result list is a pure function of the two issue sequences. The
    store's uniqueness guard on the ordered version pair makes concurrent
    requests converge on a single record.
    """

    def __init__(
        self,
        *,
        snapshots: SnapshotStorePort,
        comparisons: ComparisonStorePort,
        matcher: MatcherPort,
        classifier: ChangeClassifier,
        logger: LoggerPort,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_comparison_id,
    ) -> None:
        self._snapshots = snapshots
        self._comparisons = comparisons
        self._matcher = matcher
        self._classifier = classifier
        self._logger = logger
        self._clock = clock
        self._id_factory = id_factory

    def compute(self, before: Sequence[Issue], after: Sequence[Issue]) -> tuple[ResultEntry, ...]:
        """Match and classify two issue sequences without touching storage."""
        pairs = self._matcher.match(before, after)
        return self._classifier.classify(pairs)

    def create_or_fetch(self, *, from_version_id: str, to_version_id: str) -> tuple[Comparison, bool]:
        """Create the Comparison for an ordered version pair, or return the stored one.

        Args:
            from_version_id: Earlier version
            to_version_id: Later version

        Returns:
            (comparison, created). created is False when the pair was
            already compared, including when a concurrent request won.

        Raises:
            IdenticalVersionsError: from and to are the same version
            AnalysisNotFoundError: either version has no analysis snapshot
            VersionOrderError: from was not uploaded strictly before to
        """
        before_snapshot, after_snapshot = self._check_preconditions(from_version_id, to_version_id)

        existing = self._comparisons.find_by_pair(from_version_id, to_version_id)
        if existing is not None:
            self._logger.info(
                "comparison_reused",
                type="comparison_reused",
                comparison_id=existing.comparison_id,
                from_version_id=from_version_id,
                to_version_id=to_version_id,
            )
            return existing, False

        results = self.compute(before_snapshot.issues, after_snapshot.issues)
        candidate = Comparison(
            comparison_id=self._id_factory(),
            from_version_id=from_version_id,
            to_version_id=to_version_id,
            results=results,
            created_at=self._clock(),
        )

        stored, created = self._comparisons.create_or_get(candidate)
        self._logger.info(
            "comparison_created" if created else "comparison_reused",
            type="comparison_created" if created else "comparison_reused",
            comparison_id=stored.comparison_id,
            from_version_id=from_version_id,
            to_version_id=to_version_id,
            counts=_count_by_change(stored.results),
        )
        return stored, created

    def _check_preconditions(
        self, from_version_id: str, to_version_id: str
    ) -> tuple[AnalysisSnapshot, AnalysisSnapshot]:
        if from_version_id == to_version_id:
            raise IdenticalVersionsError(from_version_id)

        before_snapshot = self._snapshots.load(from_version_id)
        if before_snapshot is None:
            raise AnalysisNotFoundError(from_version_id)
        after_snapshot = self._snapshots.load(to_version_id)
        if after_snapshot is None:
            raise AnalysisNotFoundError(to_version_id)

        if not before_snapshot.uploaded_at < after_snapshot.uploaded_at:
            raise VersionOrderError(from_version_id, to_version_id)

        return before_snapshot, after_snapshot


def _count_by_change(results: Sequence[ResultEntry]) -> dict[str, int]:
    counts = {change.value: 0 for change in ChangeType}
    for entry in results:
        counts[entry.change_type.value] += 1
    return counts
