from __future__ import annotations

import json
import re
import threading
from pathlib import Path
from typing import Optional

from ..core.domain.exceptions import InvalidIdError
from ..core.domain.models import AnalysisSnapshot
from ..shared.exclusive_write import write_exclusive
from .serialization import snapshot_from_wire, snapshot_to_wire

_SAFE_ID = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,127}$")


def check_record_id(record_id: str, kind: str = "version id") -> str:
    """Reject ids that cannot be used verbatim as a file name."""
    if not _SAFE_ID.match(record_id) or ".." in record_id:
        raise InvalidIdError(record_id, kind)
    return record_id


class SnapshotStore:
    """Append-only store of analysis snapshots.

    One JSON file per version under `snapshots_dir`; a file is written once
    and never rewritten.
    """

    def __init__(self, *, snapshots_dir: Path) -> None:
        self._snapshots_dir = snapshots_dir
        self._lock = threading.Lock()

    def _path(self, version_id: str) -> Path:
        return self._snapshots_dir / f"{check_record_id(version_id)}.json"

    def create(self, snapshot: AnalysisSnapshot) -> bool:
        fp = self._path(snapshot.version_id)
        payload = json.dumps(snapshot_to_wire(snapshot), ensure_ascii=False, indent=2)
        with self._lock:
            return write_exclusive(fp, payload)

    def load(self, version_id: str) -> Optional[AnalysisSnapshot]:
        fp = self._path(version_id)
        if not fp.exists():
            return None
        return snapshot_from_wire(json.loads(fp.read_text(encoding="utf-8")))
