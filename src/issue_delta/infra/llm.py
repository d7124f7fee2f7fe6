from __future__ import annotations

from .llm_adapters import get_adapter
from ..core.domain.prompt import build_polish_prompt
from ..core.ports import LoggerPort


class LLM:
    """Prose polisher backed by a hosted LLM.

    Only rewords the fact skeleton it is given; the caller verifies the
    output and falls back to the facts if anything was changed.
    """

    def __init__(
        self,
        *,
        provider: str,
        model: str,
        api_key: str,
        logger: LoggerPort,
        timeout: float = 20.0,
        max_output_tokens: int = 800,
    ) -> None:
        self._provider = provider
        self._model = model
        self._api_key = api_key
        self._logger = logger
        self._timeout = timeout
        self._max_output_tokens = max_output_tokens

    def polish(self, facts: str) -> str:
        prompt = build_polish_prompt(facts=facts)
        self._logger.info(
            "llm_input",
            type="llm_input",
            provider=self._provider,
            model=self._model,
            prompt_len=len(prompt),
        )

        adapter = get_adapter(self._provider, self._model, self._api_key, timeout=self._timeout)
        resp = adapter.run(prompt, max_output_tokens=self._max_output_tokens)
        text = resp.text

        usage = resp.usage
        if usage is not None:
            self._logger.info(
                "llm_usage",
                type="llm_usage",
                provider=self._provider,
                model=self._model,
                input_tokens=usage.input_tokens,
                output_tokens=usage.output_tokens,
                total_tokens=usage.total_tokens,
            )

        self._logger.info(
            "llm_output",
            type="llm_output",
            provider=self._provider,
            model=self._model,
            raw_text_len=len(text),
            raw_text=text,
        )
        return text.strip()
