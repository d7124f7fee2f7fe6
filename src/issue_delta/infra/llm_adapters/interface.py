from __future__ import annotations

from typing import Protocol, runtime_checkable

from .types import LLMResponse


@runtime_checkable
class TextLLMAdapter(Protocol):
    """Minimal interface for a single-turn, tool-free text completion."""

    def run(
        self,
        prompt: str,
        *,
        max_output_tokens: int = 800,
    ) -> LLMResponse:
        """Run one request and return normalized text + token usage."""
        raise NotImplementedError
