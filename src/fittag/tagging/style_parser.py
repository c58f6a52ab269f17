"""Style subsection parsing: grounding references for validation.

The rating service writes critique in labelled sections ("Style:",
"Color Coordination:", "Fit:", "Overall Impression:"). Items named inside
the Style section are treated as ground truth about what the person wears;
each mention becomes a StyleReference whose confidence grows with the
descriptors found next to it.
"""

from __future__ import annotations

import logging
import re

from .types import StyleReference
from .vocabulary import descriptor_slot, match_clothing_noun, tokenize

logger = logging.getLogger(__name__)

STYLE_SECTION = re.compile(
    r"(?:\*\*)?\bStyle:(?:\*\*)?\s*(.*?)"
    r"(?=(?:\*\*)?\b(?:Color Coordination|Fit|Overall Impression):|\Z)",
    re.IGNORECASE | re.DOTALL,
)
SENTENCE_SPLIT = re.compile(r"[.!?]+")

BASE_CONFIDENCE = 0.80
MAX_CONFIDENCE = 0.98
WINDOW_BEFORE = 4
WINDOW_AFTER = 2
DESCRIPTOR_BONUS: dict[str, float] = {
    "color": 0.10,
    "material": 0.05,
    "pattern": 0.05,
}


def find_style_section(text: str) -> str | None:
    """Return the Style subsection body, or None if there is no Style marker."""
    if not text:
        return None
    match = STYLE_SECTION.search(text)
    if match is None:
        return None
    return match.group(1).strip()


def _containing_sentence(section: str, token: str) -> str:
    word = re.compile(rf"(?<![\w-]){re.escape(token)}(?![\w-])", re.IGNORECASE)
    for sentence in SENTENCE_SPLIT.split(section):
        if word.search(sentence):
            return sentence.strip()
    return section.strip()


def extract_style_references(text: str) -> list[StyleReference]:
    """Extract one StyleReference per clothing noun mention in the Style section.

    Args:
        text: Full feedback text.

    Returns:
        References in mention order. Empty if no Style subsection is present.
    """
    section = find_style_section(text)
    if not section:
        return []

    tokens = tokenize(section)
    references: list[StyleReference] = []
    for i, token in enumerate(tokens):
        item = match_clothing_noun(token)
        if item is None:
            continue

        window = tokens[max(0, i - WINDOW_BEFORE):i] + tokens[i + 1:i + 1 + WINDOW_AFTER]
        descriptors: list[str] = []
        confidence = BASE_CONFIDENCE
        for word in window:
            slot = descriptor_slot(word)
            # A repeated descriptor counts once.
            if slot is None or word in descriptors:
                continue
            descriptors.append(word)
            confidence += DESCRIPTOR_BONUS[slot]

        references.append(StyleReference(
            item=item,
            descriptors=tuple(descriptors),
            confidence=round(min(confidence, MAX_CONFIDENCE), 4),
            context=_containing_sentence(section, token),
        ))

    logger.debug("Style section: %d references", len(references))
    return references
