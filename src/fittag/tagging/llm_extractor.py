"""LLM-backed AI phrase extractor.

Implements the AI extractor contract ``(feedback, suggestions, item_id) ->
AIExtractionResponse`` on top of ``fittag.shared.llm.call_llm``.
"""

from __future__ import annotations

import logging
import os
from typing import Sequence

from fittag.shared.llm import LLMError, call_llm

from .parsing import _parse_phrases_json
from .prompts import MAX_AI_ITEMS, build_phrase_prompt
from .sources import DEFAULT_AI_CONFIDENCE, AIExtractionResponse, ExtractedItem

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "haiku"


class LLMPhraseExtractor:
    """Ask an LLM for "[Descriptor] [Item]" phrases."""

    def __init__(
        self,
        model: str | None = None,
        max_items: int = MAX_AI_ITEMS,
        confidence: float = DEFAULT_AI_CONFIDENCE,
        timeout: int = 60,
    ) -> None:
        self.model = model or os.environ.get("FITTAG_LLM_MODEL", DEFAULT_MODEL)
        self.max_items = max_items
        self.confidence = confidence
        self.timeout = timeout

    def __call__(
        self, feedback: str, suggestions: Sequence[str], item_id: str | None = None
    ) -> AIExtractionResponse:
        text = " ".join([feedback, *suggestions])
        prompt = build_phrase_prompt(text, self.max_items)
        try:
            response = call_llm(prompt, model=self.model, timeout=self.timeout)
        except LLMError as e:
            logger.warning("LLM extraction failed for item %s: %s", item_id, e)
            return AIExtractionResponse(success=False, error=str(e))
        if not response:
            return AIExtractionResponse(success=False, error="empty LLM response")

        phrases = list(dict.fromkeys(_parse_phrases_json(response)))[:self.max_items]
        logger.debug("LLM extracted %d phrases for item %s", len(phrases), item_id)
        return AIExtractionResponse(
            success=True,
            extracted_items=[
                ExtractedItem(name=phrase, confidence=self.confidence) for phrase in phrases
            ],
        )
