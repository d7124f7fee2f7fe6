from __future__ import annotations

import anthropic

from .types import LLMResponse, TokenUsage


class AnthropicTextAdapter:
    """Anthropic Messages API adapter (Claude Sonnet, etc.)."""

    def __init__(self, model: str, api_key: str, *, timeout: float = 20.0) -> None:
        self.model = model
        self._client = anthropic.Anthropic(api_key=api_key, timeout=timeout, max_retries=0)

    def run(
        self,
        prompt: str,
        *,
        max_output_tokens: int = 800,
    ) -> LLMResponse:
        message = self._client.messages.create(
            model=self.model,
            max_tokens=max_output_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        # message.content is a list of content blocks; only text blocks are kept
        texts: list[str] = []
        for block in message.content:
            if block.type == "text":
                texts.append(block.text)
        u = message.usage
        iu = u.input_tokens if u is not None else None
        ou = u.output_tokens if u is not None else None
        tt = (iu or 0) + (ou or 0) if (iu is not None or ou is not None) else None
        usage = TokenUsage(input_tokens=iu, output_tokens=ou, total_tokens=tt)
        return LLMResponse(text="".join(texts), usage=usage)
