"""Base LLM provider interface and convenience functions.

This module defines the abstract LLMProvider interface and the call_llm()
convenience function used by the AI phrase extractor.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger("fittag.shared.llm")


class LLMError(Exception):
    """An LLM call produced no usable text."""


# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------


class LLMProvider(ABC):
    """Abstract base for LLM providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier (e.g. 'anthropic')."""
        ...

    @abstractmethod
    def generate(
        self,
        prompt: str,
        model: str,
        timeout: int = 60,
        max_tokens: int = 500,
        temperature: float = 0.0,
    ) -> str:
        """Generate a text completion.

        Args:
            prompt: User prompt text.
            model: Model name or alias (e.g. 'haiku').
            timeout: Request timeout in seconds.
            max_tokens: Maximum output tokens.
            temperature: Sampling temperature (0.0-1.0).

        Returns:
            Generated text.

        Raises:
            LLMError: If the call fails or the reply has no text.
        """
        ...


# ---------------------------------------------------------------------------
# Provider registry
# ---------------------------------------------------------------------------

_provider_cache: dict[str, LLMProvider] = {}


def get_provider(model: str) -> LLMProvider:
    """Return (cached) provider for *model*. All models route to Anthropic."""
    key = "anthropic"
    if key not in _provider_cache:
        from .anthropic_provider import AnthropicProvider
        logger.debug("Creating AnthropicProvider for model=%s", model)
        _provider_cache[key] = AnthropicProvider()
    return _provider_cache[key]


def set_provider(provider: LLMProvider | None) -> None:
    """Install *provider* for every model (None clears the cache)."""
    _provider_cache.clear()
    if provider is not None:
        _provider_cache["anthropic"] = provider


# ---------------------------------------------------------------------------
# Convenience wrapper
# ---------------------------------------------------------------------------


def call_llm(
    prompt: str,
    model: str = "haiku",
    timeout: int = 60,
    max_tokens: int = 500,
    temperature: float = 0.0,
) -> str:
    """Call an LLM with automatic provider routing.

    Examples::

        call_llm("Hello", model="haiku")
    """
    provider = get_provider(model)
    return provider.generate(
        prompt,
        model=model,
        timeout=timeout,
        max_tokens=max_tokens,
        temperature=temperature,
    )
