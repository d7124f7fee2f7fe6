from __future__ import annotations

import json

_CLOSERS = {"{": "}", "[": "]"}


class JsonExtractor:
    """Domain service for extracting JSON from producer responses.

    Handles JSON documents that may be wrapped in markdown fences or prose.
    """

    def extract(self, text: str) -> str:
        """Extract the outermost JSON object or array from text.

        Args:
            text: Raw text potentially containing JSON

        Returns:
            Extracted JSON string (re-serialized), or the original text if
            no parseable JSON block is found
        """
        # Earlier opener first; prose like "Note [1]: {...}" falls through to the other one.
        starts = sorted(i for i in (text.find("{"), text.find("[")) if i != -1)
        for start in starts:
            end = text.rfind(_CLOSERS[text[start]])
            if end <= start:
                continue
            try:
                parsed = json.loads(text[start:end + 1])
            except json.JSONDecodeError:
                continue
            return json.dumps(parsed, ensure_ascii=False)
        return text
