from __future__ import annotations

from typing import Iterable

from ..domain.models import ChangeType, MatchedPair, ResultEntry
from ..domain.ranking import rank_complexity, rank_severity


def _direction(before_rank: int, after_rank: int) -> ChangeType:
    if after_rank < before_rank:
        return ChangeType.IMPROVED
    if after_rank > before_rank:
        return ChangeType.WORSENED
    return ChangeType.UNCHANGED


def classify_pair(pair: MatchedPair) -> ResultEntry:
    """Assign a verdict to one matched pair.

    - before only (resolved): IMPROVED
    - after only (introduced): WORSENED
    - both: severity direction; complexity only when severity is equal
    """
    before, after = pair.before, pair.after

    if after is None:
        assert before is not None
        return ResultEntry(
            issue_code=before.issue_code,
            change_type=ChangeType.IMPROVED,
            before_severity=before.severity,
            before_complexity=before.complexity,
        )

    if before is None:
        return ResultEntry(
            issue_code=after.issue_code,
            change_type=ChangeType.WORSENED,
            after_severity=after.severity,
            after_complexity=after.complexity,
        )

    change_type = _direction(rank_severity(before.severity), rank_severity(after.severity))
    if change_type is ChangeType.UNCHANGED:
        change_type = _direction(rank_complexity(before.complexity), rank_complexity(after.complexity))

    return ResultEntry(
        issue_code=before.issue_code,
        change_type=change_type,
        before_severity=before.severity,
        after_severity=after.severity,
        before_complexity=before.complexity,
        after_complexity=after.complexity,
    )


class ChangeClassifier:
    """Maps matched pairs to result entries, one entry per pair, order preserved."""

    def classify(self, pairs: Iterable[MatchedPair]) -> tuple[ResultEntry, ...]:
        return tuple(classify_pair(pair) for pair in pairs)
