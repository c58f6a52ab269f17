"""Structured name formatting using context windows in the full text."""

from __future__ import annotations

import logging
from dataclasses import replace

from .types import Candidate
from .vocabulary import (
    DESCRIPTOR_SLOTS,
    descriptor_slot,
    find_clothing_noun,
    match_clothing_noun,
    strip_leading_fillers,
    tokenize,
)

logger = logging.getLogger(__name__)

CONTEXT_WINDOW = 3
SPECIFICITY_BONUS = 0.10
MAX_PRE_VALIDATION_CONFIDENCE = 1.0


def _window_order(position: int, n_tokens: int) -> list[int]:
    """Indices around *position*: nearest preceding first, then following."""
    before = range(position - 1, max(-1, position - 1 - CONTEXT_WINDOW), -1)
    after = range(position + 1, min(n_tokens, position + 1 + CONTEXT_WINDOW))
    return [*before, *after]


def _scan_window(
    tokens: list[str], position: int, slots: dict[str, str | None]
) -> None:
    """Fill empty descriptor slots from the window around *position*.

    A scan direction stops at another clothing noun, so descriptors of a
    neighbouring item are not borrowed.
    """
    before_done = after_done = False
    for index in _window_order(position, len(tokens)):
        is_before = index < position
        if (is_before and before_done) or (not is_before and after_done):
            continue
        token = tokens[index]
        if match_clothing_noun(token):
            if is_before:
                before_done = True
            else:
                after_done = True
            continue
        slot = descriptor_slot(token)
        if slot and slots[slot] is None:
            slots[slot] = token


def format_candidate(candidate: Candidate, tokens: list[str]) -> Candidate:
    """Rebuild one candidate's name from its core item and descriptor slots."""
    name_tokens = tokenize(candidate.name)
    noun = find_clothing_noun(name_tokens)
    if noun is None:
        return candidate

    slots: dict[str, str | None] = {slot: None for slot in DESCRIPTOR_SLOTS}
    for word in (*candidate.descriptors, *name_tokens):
        slot = descriptor_slot(word)
        if slot and slots[slot] is None:
            slots[slot] = word.lower()

    for position, token in enumerate(tokens):
        if match_clothing_noun(token) == noun:
            _scan_window(tokens, position, slots)

    # Whitespace split keeps "&" so combinations survive for the item filter.
    core = strip_leading_fillers([
        w for w in candidate.name.split()
        if descriptor_slot(w.strip(",.;:!?")) is None
    ])
    found = [word for word in slots.values() if word]

    # Name keeps the leading descriptor only; the rest ride in descriptors.
    name = " ".join([*found[:1], *core])
    components = len(found) + 1
    confidence = candidate.confidence
    if components > 2:
        confidence = min(confidence + SPECIFICITY_BONUS, MAX_PRE_VALIDATION_CONFIDENCE)

    return replace(
        candidate,
        name=name,
        descriptors=tuple(found),
        confidence=round(confidence, 4),
    )


def apply_structured_format(candidates: list[Candidate], text: str) -> list[Candidate]:
    """Format every candidate against *text*. Output has the same length."""
    tokens = tokenize(text or "")
    formatted = [format_candidate(c, tokens) for c in candidates]
    renamed = sum(1 for a, b in zip(candidates, formatted) if a.name != b.name)
    logger.debug("Formatter: %d/%d names rewritten", renamed, len(candidates))
    return formatted
