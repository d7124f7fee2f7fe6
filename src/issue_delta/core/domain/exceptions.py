"""Domain exceptions for issue_delta."""

from __future__ import annotations


class PreconditionError(Exception):
    """Raised when a comparison request cannot be computed at all.

    Always raised before any matching or classification happens.
    """


class IdenticalVersionsError(PreconditionError):
    def __init__(self, version_id: str) -> None:
        self.version_id = version_id
        super().__init__(f"Cannot compare a version with itself: {version_id}")


class AnalysisNotFoundError(PreconditionError):
    """Raised when a version has no completed analysis snapshot."""

    def __init__(self, version_id: str, message: str | None = None) -> None:
        self.version_id = version_id
        if message is None:
            message = f"No analysis found for version: {version_id}"
        super().__init__(message)


class VersionOrderError(PreconditionError):
    """Raised when the 'from' version was not uploaded strictly before 'to'."""

    def __init__(self, from_version_id: str, to_version_id: str) -> None:
        self.from_version_id = from_version_id
        self.to_version_id = to_version_id
        super().__init__(
            f"Version {from_version_id} must be uploaded strictly before {to_version_id}"
        )


class AnalysisAlreadyExistsError(Exception):
    def __init__(self, version_id: str) -> None:
        self.version_id = version_id
        super().__init__(f"Analysis already exists for version: {version_id}")


class InvalidReportError(Exception):
    """Raised when producer output is not a usable issue document."""


class ComparisonNotFoundError(Exception):
    def __init__(self, comparison_id: str) -> None:
        self.comparison_id = comparison_id
        super().__init__(f"Comparison not found: {comparison_id}")


class InvalidIdError(ValueError):
    """Raised when a version or comparison id cannot name a stored record."""

    def __init__(self, record_id: str, kind: str = "version id") -> None:
        self.record_id = record_id
        self.kind = kind
        super().__init__(f"Invalid {kind}: {record_id!r}")
