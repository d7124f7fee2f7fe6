from __future__ import annotations

from ..domain.exceptions import AnalysisNotFoundError, ComparisonNotFoundError
from ..domain.models import AnalysisSnapshot, Comparison, Explanation
from ..ports import ComparisonStorePort, ExplanationStorePort, SnapshotStorePort


class ShowAnalysisUseCase:
    def __init__(self, *, snapshots: SnapshotStorePort) -> None:
        self._snapshots = snapshots

    def execute(self, version_id: str) -> AnalysisSnapshot:
        snapshot = self._snapshots.load(version_id)
        if snapshot is None:
            raise AnalysisNotFoundError(version_id)
        return snapshot


class ShowComparisonUseCase:
    """Read back a stored comparison and its explanation, if any."""

    def __init__(self, *, comparisons: ComparisonStorePort, explanations: ExplanationStorePort) -> None:
        self._comparisons = comparisons
        self._explanations = explanations

    def execute(self, comparison_id: str) -> tuple[Comparison, Explanation | None]:
        comparison = self._comparisons.load(comparison_id)
        if comparison is None:
            raise ComparisonNotFoundError(comparison_id)
        return comparison, self._explanations.load(comparison_id)
