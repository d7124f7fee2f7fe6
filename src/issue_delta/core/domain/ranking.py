from __future__ import annotations

from typing import Union

from .models import Complexity, Severity

_SEVERITY_RANK: dict[Severity, int] = {
    Severity.LOW: 0,
    Severity.MEDIUM: 1,
    Severity.HIGH: 2,
}

_COMPLEXITY_RANK: dict[Complexity, int] = {
    Complexity.O_1: 0,
    Complexity.O_N: 1,
    Complexity.O_N2: 2,
}


def rank_severity(severity: Severity) -> int:
    return _SEVERITY_RANK[severity]


def rank_complexity(complexity: Complexity) -> int:
    return _COMPLEXITY_RANK[complexity]


def rank(value: Union[Severity, Complexity]) -> int:
    """Position of a severity or complexity in its total order (0 is best)."""
    if isinstance(value, Severity):
        return rank_severity(value)
    return rank_complexity(value)
