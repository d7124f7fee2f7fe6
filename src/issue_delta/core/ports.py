from __future__ import annotations

from typing import Protocol, Optional, Sequence

from .domain.models import (
    AnalysisSnapshot,
    Comparison,
    Explanation,
    Issue,
    MatchedPair,
)


class SnapshotStorePort(Protocol):
    """Port for immutable analysis snapshots, keyed by version id."""

    def create(self, snapshot: AnalysisSnapshot) -> bool:
        """Persist a snapshot once.

        Returns:
            True if stored, False if a snapshot for the version already exists
        """
        ...

    def load(self, version_id: str) -> Optional[AnalysisSnapshot]:
        ...


class ComparisonStorePort(Protocol):
    """Port for comparisons, unique per ordered (from, to) pair."""

    def create_or_get(self, comparison: Comparison) -> tuple[Comparison, bool]:
        """Store the comparison unless one exists for its ordered pair.

        Returns:
            (stored comparison, created). When another writer won the pair,
            its committed record is returned with created=False.
        """
        ...

    def find_by_pair(self, from_version_id: str, to_version_id: str) -> Optional[Comparison]:
        ...

    def load(self, comparison_id: str) -> Optional[Comparison]:
        ...


class ExplanationStorePort(Protocol):
    """Port for explanations, at most one per comparison."""

    def create_or_get(self, explanation: Explanation) -> tuple[Explanation, bool]:
        ...

    def load(self, comparison_id: str) -> Optional[Explanation]:
        ...


class MatcherPort(Protocol):
    """Port for cross-snapshot issue pairing strategies."""

    def match(self, before: Sequence[Issue], after: Sequence[Issue]) -> list[MatchedPair]:
        ...


class ProsePolisherPort(Protocol):
    """Port for rephrasing a fact skeleton into prose.

    Implementations may only reword; callers verify the output.
    """

    def polish(self, facts: str) -> str:
        ...


class LoggerPort(Protocol):
    """Port for structured logging.

    Extra keyword fields are attached to the log record as structured data.
    """

    def debug(self, message: str, **kwargs) -> None:
        ...

    def info(self, message: str, **kwargs) -> None:
        ...

    def warning(self, message: str, **kwargs) -> None:
        ...

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        ...

    def exception(self, message: str, **kwargs) -> None:
        ...
