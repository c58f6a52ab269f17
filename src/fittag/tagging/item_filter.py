"""Item filtering: combination splitting, non-wearable rejection, cleanup."""

from __future__ import annotations

import logging
import re
from dataclasses import replace

from .types import Candidate
from .vocabulary import (
    COMBINATION_SEPARATORS,
    STYLING_TERMS,
    categorize,
    has_clothing_noun,
    strip_leading_fillers,
    tokenize,
)

logger = logging.getLogger(__name__)

SPLIT_CONFIDENCE_FACTOR = 0.9
_PUNCTUATION = ",.;:!?\"'()"


def split_combination(name: str) -> tuple[str, str] | None:
    """Split "A and B" when both sides name a clothing item.

    The first separator (in ``COMBINATION_SEPARATORS`` order, then position)
    whose two sides both contain a clothing noun wins.
    """
    lowered = name.lower()
    for separator in COMBINATION_SEPARATORS:
        start = 0
        while True:
            index = lowered.find(separator, start)
            if index < 0:
                break
            left = name[:index].strip()
            right = name[index + len(separator):].strip()
            if left and right and has_clothing_noun(left) and has_clothing_noun(right):
                return left, right
            start = index + 1
    return None


def is_styling_only(name: str) -> bool:
    tokens = tokenize(name)
    return not STYLING_TERMS.isdisjoint(tokens) and not has_clothing_noun(name)


def clean_name(name: str) -> str:
    """Strip leading articles/styling verbs, collapse whitespace, capitalize tokens."""
    words = [w.strip(_PUNCTUATION) for w in name.split()]
    words = strip_leading_fillers([w for w in words if w])
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)


def _filter_one(candidate: Candidate) -> list[Candidate]:
    parts = split_combination(candidate.name)
    if parts is not None:
        confidence = candidate.confidence * SPLIT_CONFIDENCE_FACTOR
        children: list[Candidate] = []
        for part in parts:
            child = replace(candidate, name=part).with_confidence(confidence)
            children.extend(_filter_one(child))
        logger.debug("Split combination %r into %d items", candidate.name, len(children))
        return children

    if is_styling_only(candidate.name):
        logger.debug("Dropped styling term %r", candidate.name)
        return []

    if not has_clothing_noun(candidate.name):
        logger.debug("Dropped non-clothing %r", candidate.name)
        return []

    name = clean_name(candidate.name)
    return [replace(candidate, name=name, category=categorize(name))]


def filter_items(candidates: list[Candidate]) -> list[Candidate]:
    """Apply the item rules to every candidate, preserving order."""
    kept: list[Candidate] = []
    for candidate in candidates:
        kept.extend(_filter_one(candidate))
    logger.debug("ItemFilter: %d in, %d out", len(candidates), len(kept))
    return kept
