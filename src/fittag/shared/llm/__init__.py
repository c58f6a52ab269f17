"""LLM provider abstraction."""
from .base import call_llm, get_provider, set_provider, LLMError, LLMProvider
from .anthropic_provider import AnthropicProvider

__all__ = [
    "call_llm", "get_provider", "set_provider", "LLMError", "LLMProvider", "AnthropicProvider",
]
