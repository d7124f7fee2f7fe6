from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Optional

from ..core.domain.models import Comparison
from ..shared.exclusive_write import write_exclusive
from .serialization import comparison_from_wire, comparison_to_wire
from .snapshot_store import check_record_id


class ComparisonStore:
    """Comparison records plus an index keyed by the ordered version pair.

    Layout under `comparisons_dir`:
        records/<comparison_id>.json
        pairs/<from_version_id>/<to_version_id>.json  -> {"id": <comparison_id>}

    The pair index entry is created exclusively and acts as the uniqueness
    constraint. A record is always written before its index entry, so any
    index entry a reader sees points at a complete record.
    """

    def __init__(self, *, comparisons_dir: Path) -> None:
        self._records_dir = comparisons_dir / "records"
        self._pairs_dir = comparisons_dir / "pairs"
        self._lock = threading.Lock()

    def _record_path(self, comparison_id: str) -> Path:
        return self._records_dir / f"{check_record_id(comparison_id, 'comparison id')}.json"

    def _pair_path(self, from_version_id: str, to_version_id: str) -> Path:
        return self._pairs_dir / check_record_id(from_version_id) / f"{check_record_id(to_version_id)}.json"

    def create_or_get(self, comparison: Comparison) -> tuple[Comparison, bool]:
        record_fp = self._record_path(comparison.comparison_id)
        pair_fp = self._pair_path(comparison.from_version_id, comparison.to_version_id)
        payload = json.dumps(comparison_to_wire(comparison), ensure_ascii=False, indent=2)

        with self._lock:
            if not write_exclusive(record_fp, payload):
                raise FileExistsError(f"Comparison id already used: {comparison.comparison_id}")

            if write_exclusive(pair_fp, json.dumps({"id": comparison.comparison_id})):
                return comparison, True

            # Lost the pair: drop our record and read back the winner's
            record_fp.unlink(missing_ok=True)

        winner = self.find_by_pair(comparison.from_version_id, comparison.to_version_id)
        if winner is None:
            raise RuntimeError(
                f"Comparison index points at a missing record: "
                f"{comparison.from_version_id} -> {comparison.to_version_id}"
            )
        return winner, False

    def find_by_pair(self, from_version_id: str, to_version_id: str) -> Optional[Comparison]:
        pair_fp = self._pair_path(from_version_id, to_version_id)
        if not pair_fp.exists():
            return None
        comparison_id = json.loads(pair_fp.read_text(encoding="utf-8"))["id"]
        return self.load(comparison_id)

    def load(self, comparison_id: str) -> Optional[Comparison]:
        fp = self._record_path(comparison_id)
        if not fp.exists():
            return None
        return comparison_from_wire(json.loads(fp.read_text(encoding="utf-8")))
