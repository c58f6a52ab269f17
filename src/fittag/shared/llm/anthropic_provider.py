"""Anthropic (Claude) LLM provider over the Messages API.

Authentication: set ANTHROPIC_API_KEY in the environment.

One request per call. Retries and deadlines beyond the request timeout
belong to whoever drives the tagging pipeline, so every failure is raised
as LLMError and surfaces as a failed AI source.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any

import httpx

from .base import LLMError, LLMProvider

logger = logging.getLogger("fittag.shared.llm.anthropic")

MODEL_MAP: dict[str, str] = {
    "haiku": "claude-haiku-4-5",
    "sonnet": "claude-sonnet-4-5",
}


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider authenticated with an API key."""

    API_ENDPOINT = "https://api.anthropic.com/v1/messages"
    API_VERSION = "2023-06-01"

    def __init__(
        self, api_key: str | None = None, client: httpx.Client | None = None
    ) -> None:
        api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        if not api_key:
            raise ValueError(
                "Anthropic API key not found.\n"
                "Set ANTHROPIC_API_KEY to enable AI phrase extraction."
            )
        self._api_key = api_key
        self._client = client

    @property
    def name(self) -> str:
        return "anthropic"

    def _post(self, body: dict[str, Any], timeout: int) -> httpx.Response:
        headers = {
            "x-api-key": self._api_key,
            "anthropic-version": self.API_VERSION,
            "Content-Type": "application/json",
        }
        post = self._client.post if self._client is not None else httpx.post
        return post(self.API_ENDPOINT, json=body, headers=headers, timeout=timeout)

    def generate(
        self,
        prompt: str,
        model: str = "haiku",
        timeout: int = 60,
        max_tokens: int = 500,
        temperature: float = 0.0,
    ) -> str:
        """Generate text using the Anthropic Messages API.

        Raises:
            LLMError: On a transport error, a non-2xx status, or a reply
                without text.
        """
        resolved_model = MODEL_MAP.get(model, model)
        logger.debug(
            "[anthropic] model=%s prompt_len=%d timeout=%ds",
            resolved_model, len(prompt), timeout,
        )
        body: dict[str, Any] = {
            "model": resolved_model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }

        start_time = time.time()
        try:
            response = self._post(body, timeout)
        except httpx.TransportError as e:
            raise LLMError(f"{type(e).__name__}: {e}") from e
        elapsed = time.time() - start_time

        if not response.is_success:
            logger.warning(
                "[anthropic] FAILED %d | model=%s | %.1fs",
                response.status_code, resolved_model, elapsed,
            )
            raise LLMError(f"HTTP {response.status_code}: {response.text[:200]}")

        try:
            data = response.json()
        except ValueError as e:
            raise LLMError("response body is not JSON") from e
        if not isinstance(data, dict):
            raise LLMError(f"unexpected response body {type(data).__name__}")

        usage = data.get("usage", {})
        logger.debug(
            "[anthropic] OK | model=%s | in=%d out=%d | %.1fs",
            resolved_model,
            usage.get("input_tokens", 0),
            usage.get("output_tokens", 0),
            elapsed,
        )

        text = "\n".join(
            block.get("text", "")
            for block in data.get("content", [])
            if block.get("type") == "text"
        ).strip()
        if not text:
            raise LLMError(f"no text content (stop_reason={data.get('stop_reason')})")
        return text
