from __future__ import annotations

from ..domain.exceptions import AnalysisNotFoundError, IdenticalVersionsError, VersionOrderError
from ..domain.models import Comparison
from ..ports import SnapshotStorePort
from ..services import ResultAggregator


class CompareVersionsUseCase:
    """Use case for comparing two analyzed versions.

    Thin orchestration layer that delegates to ResultAggregator.
    """

    def __init__(self, *, aggregator: ResultAggregator, snapshots: SnapshotStorePort) -> None:
        self._aggregator = aggregator
        self._snapshots = snapshots

    def execute(self, *, from_version_id: str, to_version_id: str) -> Comparison:
        """Create or fetch the comparison for an ordered version pair.

        Args:
            from_version_id: Earlier version
            to_version_id: Later version

        Returns:
            Stored comparison (the existing one if already created)
        """
        comparison, _ = self._aggregator.create_or_fetch(
            from_version_id=from_version_id,
            to_version_id=to_version_id,
        )
        return comparison

    def order(self, version_a: str, version_b: str) -> tuple[str, str]:
        """Order two versions by upload time, earlier first.

        Raises:
            IdenticalVersionsError: If both ids are the same
            AnalysisNotFoundError: If either version has no snapshot
            VersionOrderError: If both were uploaded at the same instant
        """
        if version_a == version_b:
            raise IdenticalVersionsError(version_a)
        snap_a = self._snapshots.load(version_a)
        if snap_a is None:
            raise AnalysisNotFoundError(version_a)
        snap_b = self._snapshots.load(version_b)
        if snap_b is None:
            raise AnalysisNotFoundError(version_b)

        if snap_a.uploaded_at < snap_b.uploaded_at:
            return version_a, version_b
        if snap_b.uploaded_at < snap_a.uploaded_at:
            return version_b, version_a
        raise VersionOrderError(version_a, version_b)
