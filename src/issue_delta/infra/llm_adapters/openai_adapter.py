from __future__ import annotations

from openai import OpenAI

from .types import LLMResponse, TokenUsage


class OpenAITextAdapter:
    """OpenAI Responses API adapter (gpt-4o, gpt-5, etc.).

    - Plain text input, no tools
    - Client-level timeout; retries disabled so the caller's bound holds
    """

    def __init__(self, model: str, api_key: str, *, timeout: float = 20.0) -> None:
        self.model = model
        self._client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def run(
        self,
        prompt: str,
        *,
        max_output_tokens: int = 800,
    ) -> LLMResponse:
        response = self._client.responses.create(
            model=self.model,
            input=prompt,
            max_output_tokens=max_output_tokens,
            store=False,
        )
        usage = None
        u = response.usage
        if u is not None:
            iu = u.input_tokens
            ou = u.output_tokens
            tt = u.total_tokens if u.total_tokens is not None else (iu or 0) + (ou or 0)
            usage = TokenUsage(input_tokens=iu, output_tokens=ou, total_tokens=tt)
        return LLMResponse(text=response.output_text or "", usage=usage)
