from __future__ import annotations

from ..domain.exceptions import ComparisonNotFoundError
from ..domain.models import Explanation
from ..ports import ComparisonStorePort
from ..services import ExplanationSynthesizer


class ExplainComparisonUseCase:
    def __init__(
        self,
        *,
        comparisons: ComparisonStorePort,
        synthesizer: ExplanationSynthesizer,
    ) -> None:
        self._comparisons = comparisons
        self._synthesizer = synthesizer

    def execute(self, *, comparison_id: str, polish: bool = True) -> Explanation:
        """Generate the explanation for a comparison, or return the cached one.

        Raises:
            ComparisonNotFoundError: If no comparison has this id
        """
        comparison = self._comparisons.load(comparison_id)
        if comparison is None:
            raise ComparisonNotFoundError(comparison_id)
        explanation, _ = self._synthesizer.explain(comparison, polish=polish)
        return explanation
