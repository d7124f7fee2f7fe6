from __future__ import annotations

import os
import secrets
from pathlib import Path


def write_exclusive(path: Path, text: str) -> bool:
    """Create `path` with `text` only if it does not exist yet.

    The content is written to a temporary sibling first and then hard-linked
    into place, so readers never observe a partially written file and
    exactly one concurrent writer wins.

    Returns:
        True if this call created the file, False if it already existed
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(f".{path.name}.{secrets.token_hex(8)}.tmp")
    tmp.write_text(text, encoding="utf-8")
    try:
        os.link(tmp, path)
        return True
    except FileExistsError:
        return False
    finally:
        tmp.unlink(missing_ok=True)
