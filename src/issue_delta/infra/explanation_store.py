from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Optional

from ..core.domain.models import Explanation
from ..shared.exclusive_write import write_exclusive
from .serialization import explanation_from_wire, explanation_to_wire
from .snapshot_store import check_record_id


class ExplanationStore:
    """One immutable explanation file per comparison id."""

    def __init__(self, *, explanations_dir: Path) -> None:
        self._explanations_dir = explanations_dir
        self._lock = threading.Lock()

    def _path(self, comparison_id: str) -> Path:
        return self._explanations_dir / f"{check_record_id(comparison_id, 'comparison id')}.json"

    def create_or_get(self, explanation: Explanation) -> tuple[Explanation, bool]:
        fp = self._path(explanation.comparison_id)
        payload = json.dumps(explanation_to_wire(explanation), ensure_ascii=False, indent=2)
        with self._lock:
            created = write_exclusive(fp, payload)
        if created:
            return explanation, True

        existing = self.load(explanation.comparison_id)
        assert existing is not None
        return existing, False

    def load(self, comparison_id: str) -> Optional[Explanation]:
        fp = self._path(comparison_id)
        if not fp.exists():
            return None
        return explanation_from_wire(json.loads(fp.read_text(encoding="utf-8")))
