"""Ranking, deduplication with confidence accumulation, and cross-source conflict policy."""

from __future__ import annotations

import logging
from dataclasses import replace

from .types import Candidate, ValidatedTag
from .vocabulary import find_clothing_noun, normalize_name, tokenize

logger = logging.getLogger(__name__)

DUPLICATE_BOOST = 0.05
MAX_CONFIDENCE = 0.98

# Equal confidence: catalog evidence outranks the AI extractor, which outranks regex.
KIND_PRIORITY: dict[str, int] = {"dataset": 0, "ai-structured": 1, "pattern": 2}


def rank_candidates(candidates: list[Candidate]) -> list[Candidate]:
    """Order by confidence, then source kind. Stable otherwise."""
    return sorted(
        candidates,
        key=lambda c: (-c.confidence, KIND_PRIORITY.get(c.kind, len(KIND_PRIORITY))),
    )


def _contributors(item: Candidate | ValidatedTag) -> tuple[str, ...]:
    return item.contributors or (item.source,)


def remove_duplicates(
    candidates: list[Candidate], boost: float = DUPLICATE_BOOST
) -> list[Candidate]:
    """Merge candidates by normalized name.

    The first occurrence of a name is kept; each later occurrence adds
    *boost* to it (capped at ``MAX_CONFIDENCE``) and is dropped. The kept
    candidate records the sources of every occurrence in ``contributors``.

    Args:
        candidates: Candidates in priority order.
        boost: Confidence added per duplicate. 0 keeps confidence fixed.

    Returns:
        Unique candidates in first-occurrence order.
    """
    merged: dict[str, Candidate] = {}
    for candidate in candidates:
        key = normalize_name(candidate.name)
        canonical = merged.get(key)
        if canonical is None:
            merged[key] = replace(candidate, contributors=_contributors(candidate))
            continue
        contributors = tuple(dict.fromkeys((*canonical.contributors, *_contributors(candidate))))
        canonical = replace(canonical, contributors=contributors)
        if boost:
            canonical = canonical.with_confidence(
                min(canonical.confidence + boost, MAX_CONFIDENCE)
            )
        merged[key] = canonical

    if len(merged) < len(candidates):
        logger.debug("Dedup: %d -> %d", len(candidates), len(merged))
    return list(merged.values())


def resolve_conflicts(tags: list[ValidatedTag]) -> list[ValidatedTag]:
    """Drop tags that contradict a stronger tag for the same garment.

    Two tags sharing a clothing noun conflict only when no source backs
    both of them: then they are rival descriptions of one garment and the
    higher confidence wins (earliest on ties). A source that names a white
    shirt and a blue shirt is describing two shirts, so tags with a common
    contributor are all kept.
    """
    groups: dict[str, list[ValidatedTag]] = {}
    for tag in tags:
        noun = find_clothing_noun(tokenize(tag.name)) or normalize_name(tag.name)
        groups.setdefault(noun, []).append(tag)

    dropped: set[int] = set()
    for noun, group in groups.items():
        if len(group) < 2:
            continue
        kept: list[ValidatedTag] = []
        for tag in sorted(group, key=lambda t: -t.confidence):
            sources = set(_contributors(tag))
            rival = next((k for k in kept if sources.isdisjoint(_contributors(k))), None)
            if rival is None:
                kept.append(tag)
                continue
            dropped.add(id(tag))
            logger.debug(
                "Conflict on %r: kept %r (%s), dropped %r (%s)",
                noun, rival.name, rival.source, tag.name, tag.source,
            )

    return [t for t in tags if id(t) not in dropped]
