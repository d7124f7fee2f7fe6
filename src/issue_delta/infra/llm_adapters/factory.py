from __future__ import annotations

from .anthropic_adapter import AnthropicTextAdapter
from .interface import TextLLMAdapter
from .openai_adapter import OpenAITextAdapter
from .types import Provider


def get_adapter(provider: Provider, model: str, api_key: str, *, timeout: float = 20.0) -> TextLLMAdapter:
    """Factory that returns an adapter for the requested provider/model."""
    if provider == "openai":
        return OpenAITextAdapter(model, api_key, timeout=timeout)
    if provider == "anthropic":
        return AnthropicTextAdapter(model, api_key, timeout=timeout)
    raise ValueError("provider must be 'openai' or 'anthropic'")
