from .types import Provider, TokenUsage, LLMResponse
from .interface import TextLLMAdapter
from .openai_adapter import OpenAITextAdapter
from .anthropic_adapter import AnthropicTextAdapter
from .factory import get_adapter

__all__ = [
    "Provider",
    "TokenUsage",
    "LLMResponse",
    "TextLLMAdapter",
    "OpenAITextAdapter",
    "AnthropicTextAdapter",
    "get_adapter",
]
