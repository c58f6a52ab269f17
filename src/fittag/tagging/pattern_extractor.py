"""Rule-table clothing phrase extraction - no external calls."""

from __future__ import annotations

import re
from typing import Iterator

from .types import Candidate
from .vocabulary import (
    CLOTHING_NOUNS,
    COLOR_WORDS,
    FIT_WORDS,
    MATERIAL_WORDS,
    NON_WEARABLE_WORDS,
    PATTERN_WORDS,
    categorize,
    is_descriptor,
    normalize_name,
    tokenize,
)

PATTERN_CONFIDENCE = 0.7
PATTERN_SOURCE = "pattern"

# Hyphen counts as part of a word so "shirt" never matches inside "t-shirt".
_START = r"(?<![\w-])"
_END = r"(?![\w-])"


def _alternation(words: tuple[str, ...]) -> str:
    ordered = sorted(words, key=len, reverse=True)
    return "(?:" + "|".join(re.escape(w) for w in ordered) + ")"


_COLOR = _alternation(COLOR_WORDS)
_PATTERN = _alternation(PATTERN_WORDS)
_MATERIAL = _alternation(MATERIAL_WORDS)
_FIT = _alternation(FIT_WORDS)
_ITEM = _alternation(CLOTHING_NOUNS) + r"(?:es|s)?"

# Most specific first. Every entry scans the whole text.
PHRASE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        "color_pattern_material_item",
        re.compile(
            rf"{_START}{_COLOR}\s+(?:{_PATTERN}\s+)?(?:{_MATERIAL}\s+)?{_ITEM}{_END}",
            re.IGNORECASE,
        ),
    ),
    ("fit_item", re.compile(rf"{_START}{_FIT}\s+{_ITEM}{_END}", re.IGNORECASE)),
    ("material_item", re.compile(rf"{_START}{_MATERIAL}\s+{_ITEM}{_END}", re.IGNORECASE)),
    ("item", re.compile(rf"{_START}{_ITEM}{_END}", re.IGNORECASE)),
)


def is_non_wearable(phrase: str) -> bool:
    return not NON_WEARABLE_WORDS.isdisjoint(tokenize(phrase))


def iter_phrase_matches(text: str) -> Iterator[tuple[str, str]]:
    """Yield ``(pattern_name, phrase)`` in table order, then text order."""
    for pattern_name, pattern in PHRASE_PATTERNS:
        for match in pattern.finditer(text):
            yield pattern_name, normalize_name(match.group())


def extract_pattern_candidates(
    text: str, confidence: float = PATTERN_CONFIDENCE
) -> list[Candidate]:
    """Extract clothing phrases from *text* using ``PHRASE_PATTERNS``."""
    if not text or not text.strip():
        return []

    candidates: list[Candidate] = []
    for _pattern_name, phrase in iter_phrase_matches(text):
        if is_non_wearable(phrase):
            continue
        candidates.append(Candidate(
            name=phrase,
            descriptors=tuple(t for t in tokenize(phrase) if is_descriptor(t)),
            category=categorize(phrase),
            confidence=confidence,
            source=PATTERN_SOURCE,
            kind="pattern",
        ))
    return candidates
