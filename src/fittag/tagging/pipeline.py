"""Tagging orchestrator: basic / medium / advanced tiers.

Stages (medium and advanced):
  1. Candidate generation from the tier's sources (concurrent in advanced)
  2. Structured formatting against the full text
  3. Item filtering (combination split, non-wearables, cleanup)
  4. Rank by confidence then source kind, dedup with confidence accumulation
  5. Validation against Style subsection references, when the config validates
  6. Cross-source conflict resolution, final ranking, truncation

Basic runs only pattern extraction and cleanup, with no validation.

The stages come from the TierConfig flags, not the tier name: dataset
matchers select the advanced path, AI extraction alone the medium path.
"""

from __future__ import annotations

import logging
import time
from typing import Iterable, Sequence

from .config import TIER_PRESETS, TierConfig, get_tier_config
from .dedup import rank_candidates, remove_duplicates, resolve_conflicts
from .formatter import apply_structured_format
from .item_filter import filter_items
from .pattern_extractor import PATTERN_SOURCE, extract_pattern_candidates
from .sources import (
    AIExtractor,
    CatalogMatcher,
    DatasetMatcher,
    ai_source,
    dataset_source,
    matcher_name,
    run_sources,
)
from .style_parser import extract_style_references, find_style_section
from .types import (
    Candidate,
    SourceSpec,
    StyleReference,
    TaggingResult,
    ValidatedTag,
)
from .validator import validate_candidates

logger = logging.getLogger(__name__)


def _style_references(feedback: str) -> list[StyleReference] | None:
    """None when the feedback has no Style subsection at all."""
    if find_style_section(feedback) is None:
        return None
    return extract_style_references(feedback)


def _above_floor(candidates: Iterable[Candidate], config: TierConfig) -> list[Candidate]:
    return [c for c in candidates if c.confidence >= config.min_confidence]


def _gate(
    candidates: list[Candidate],
    references: list[StyleReference] | None,
    config: TierConfig,
    result: TaggingResult,
) -> list[ValidatedTag]:
    if not config.validate:
        return [ValidatedTag.from_candidate(c) for c in candidates]
    tags, rejected = validate_candidates(candidates, references)
    result.rejected.update(rejected)
    return tags


def _validate_and_rank(
    candidates: list[Candidate],
    text: str,
    references: list[StyleReference] | None,
    config: TierConfig,
    max_items: int,
    result: TaggingResult,
) -> list[ValidatedTag]:
    formatted = apply_structured_format(candidates, text)
    filtered = filter_items(formatted)
    # The strongest claim for a name becomes its canonical entry.
    unique = remove_duplicates(rank_candidates(filtered))

    tags = _gate(unique, references, config, result)
    tags = resolve_conflicts(tags)
    tags.sort(key=lambda t: -t.confidence)
    return tags[:max_items]


def _run_basic(
    feedback: str, config: TierConfig, max_items: int, result: TaggingResult
) -> list[ValidatedTag]:
    candidates = _above_floor(
        extract_pattern_candidates(feedback, config.pattern_confidence), config
    )
    result.candidate_count = len(candidates)
    cleaned = remove_duplicates(filter_items(candidates), boost=0.0)
    references = _style_references(feedback) if config.validate else None
    return _gate(cleaned, references, config, result)[:max_items]


def _run_medium(
    feedback: str,
    suggestions: list[str],
    ai_extractor: AIExtractor | None,
    item_id: str | None,
    config: TierConfig,
    max_items: int,
    result: TaggingResult,
    log: logging.Logger,
) -> list[ValidatedTag]:
    candidates: list[Candidate] = []
    if ai_extractor is None:
        log.info("No AI extractor configured, using basic tier")
    else:
        spec = ai_source(ai_extractor, feedback, suggestions, item_id, config.medium_ai_discount)
        outcome = run_sources([spec], max_workers=1, log=log)[0]
        if outcome.error:
            result.failed_sources[outcome.name] = outcome.error
        candidates = _above_floor(outcome.candidates, config)

    if not candidates:
        if ai_extractor is not None:
            log.info("AI extraction produced nothing usable, using basic tier")
        basic = TIER_PRESETS["basic"]
        result.extraction_method = basic.extraction_method
        return _run_basic(feedback, basic, max_items, result)

    result.candidate_count = len(candidates)
    return _validate_and_rank(
        candidates, feedback, _style_references(feedback), config, max_items, result
    )


def _advanced_sources(
    feedback: str,
    suggestions: list[str],
    dataset_matchers: Sequence[DatasetMatcher] | None,
    ai_extractor: AIExtractor | None,
    item_id: str | None,
    config: TierConfig,
    log: logging.Logger,
) -> list[SourceSpec]:
    full_text = " ".join([feedback, *suggestions])

    def run_pattern() -> list[Candidate]:
        return extract_pattern_candidates(full_text, config.pattern_confidence)

    specs = [SourceSpec(
        name=PATTERN_SOURCE, kind="pattern", discount=config.pattern_discount, run=run_pattern,
    )]

    if config.use_dataset_matchers:
        matchers = [CatalogMatcher()] if dataset_matchers is None else list(dataset_matchers)
        if len(matchers) > config.max_dataset_matchers:
            log.warning(
                "%d dataset matchers supplied, using the first %d",
                len(matchers), config.max_dataset_matchers,
            )
            matchers = matchers[:config.max_dataset_matchers]
        names: set[str] = set()
        for i, matcher in enumerate(matchers):
            name = matcher_name(matcher, i)
            if name in names:
                name = f"{name}-{i + 1}"
            names.add(name)
            specs.append(dataset_source(name, matcher, full_text, config.dataset_discounts[i]))

    if config.use_ai_extraction and ai_extractor is not None:
        specs.append(ai_source(ai_extractor, feedback, suggestions, item_id, config.ai_discount))

    return specs


def _run_advanced(
    feedback: str,
    suggestions: list[str],
    dataset_matchers: Sequence[DatasetMatcher] | None,
    ai_extractor: AIExtractor | None,
    item_id: str | None,
    config: TierConfig,
    max_items: int,
    result: TaggingResult,
    log: logging.Logger,
) -> list[ValidatedTag]:
    specs = _advanced_sources(
        feedback, suggestions, dataset_matchers, ai_extractor, item_id, config, log
    )
    outcomes = run_sources(specs, max_workers=config.max_workers, log=log)

    merged: list[Candidate] = []
    for outcome in outcomes:
        if outcome.error:
            result.failed_sources[outcome.name] = outcome.error
        merged.extend(_above_floor(outcome.candidates, config))
    result.candidate_count = len(merged)

    if not merged:
        log.info("No candidates from %d sources", len(specs))
        return []

    full_text = " ".join([feedback, *suggestions])
    return _validate_and_rank(
        merged, full_text, _style_references(feedback), config, max_items, result
    )


def run_tagging(
    feedback: str | None,
    suggestions: Sequence[str] | None = None,
    tier: str = "advanced",
    max_items: int | None = None,
    dataset_matchers: Sequence[DatasetMatcher] | None = None,
    ai_extractor: AIExtractor | None = None,
    item_id: str | None = None,
    log: logging.Logger | None = None,
    config: TierConfig | None = None,
) -> TaggingResult:
    """Turn outfit critique text into validated garment tags.

    Args:
        feedback: Critique text from the rating service.
        suggestions: Improvement suggestions from the rating service.
        tier: ``basic``, ``medium`` or ``advanced``.
        max_items: Cap on emitted tags (tier default if None).
        dataset_matchers: Catalog matchers for advanced. None uses the
            built-in catalog matcher; an empty list disables matching.
        ai_extractor: LLM phrase extractor for medium and advanced.
        item_id: Opaque id forwarded to the AI extractor.
        log: Logger for diagnostics (module logger if None).
        config: Overrides the tier preset. Its flags select the stages.

    Returns:
        TaggingResult with tags ranked by confidence plus diagnostics.

    Raises:
        ValueError: If *tier* is not a known tier.
    """
    log = log or logger
    preset = get_tier_config(tier)
    config = config or preset

    result = TaggingResult(tier=tier, extraction_method=config.extraction_method)
    if not feedback or not feedback.strip():
        log.debug("Empty feedback, no tags")
        return result

    start = time.perf_counter()
    max_items = config.max_items if max_items is None else max(0, max_items)
    suggestion_list = [s for s in suggestions or [] if s and s.strip()]

    if config.use_dataset_matchers:
        tags = _run_advanced(
            feedback, suggestion_list, dataset_matchers, ai_extractor, item_id,
            config, max_items, result, log,
        )
    elif config.use_ai_extraction:
        tags = _run_medium(
            feedback, suggestion_list, ai_extractor, item_id, config, max_items, result, log
        )
    else:
        tags = _run_basic(feedback, config, max_items, result)

    result.tags = tags
    result.style_references = _style_references(feedback) or []
    result.processing_time = round(time.perf_counter() - start, 4)

    log.info(
        "Tagged %d items (tier=%s, candidates=%d, rejected=%d, failed_sources=%d, %.3fs)",
        result.item_count, tier, result.candidate_count, len(result.rejected),
        len(result.failed_sources), result.processing_time,
    )
    return result


def extract_tags(
    feedback: str | None,
    suggestions: Sequence[str] | None = None,
    tier: str = "advanced",
    max_items: int | None = None,
    **kwargs,
) -> list[ValidatedTag]:
    """Tags only; see ``run_tagging``."""
    return run_tagging(feedback, suggestions, tier=tier, max_items=max_items, **kwargs).tags
