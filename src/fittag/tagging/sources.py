"""Candidate sources: dataset matchers, AI extractor adapter, concurrent runner.

External sources are black boxes to the pipeline:
  - dataset matcher: ``(text) -> Iterable[Candidate]``
  - AI extractor: ``(feedback, suggestions, item_id) -> response``

Each is wrapped in a SourceSpec carrying its confidence discount, then run
by ``run_sources`` with an all-settled join.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, Mapping, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ExtractionSourceFailure
from .types import Candidate, SourceKind, SourceSpec
from .vocabulary import (
    CLOTHING_NOUNS,
    categorize,
    find_clothing_noun,
    is_descriptor,
    match_clothing_noun,
    tokenize,
)

logger = logging.getLogger(__name__)

AI_SOURCE = "ai-structured"
DEFAULT_AI_CONFIDENCE = 0.95


# ---------------------------------------------------------------------------
# Collaborator interfaces
# ---------------------------------------------------------------------------


@runtime_checkable
class DatasetMatcher(Protocol):
    """Catalog lookup over free text."""

    def __call__(self, text: str) -> Iterable[Candidate]:
        ...


class ExtractedItem(BaseModel):
    """One phrase returned by an AI extractor."""

    name: str = Field(min_length=1)
    descriptors: list[str] = Field(default_factory=list)
    category: str = "other"
    confidence: float = Field(default=DEFAULT_AI_CONFIDENCE, ge=0.0, le=1.0)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = " ".join(value.split())
        if not value:
            raise ValueError("name is blank")
        return value


class AIExtractionResponse(BaseModel):
    success: bool
    extracted_items: list[ExtractedItem] | None = Field(
        default=None, alias="extractedItems"
    )
    error: str | None = None

    model_config = {"populate_by_name": True}

    @field_validator("extracted_items", mode="before")
    @classmethod
    def _accept_bare_names(cls, value: Any) -> Any:
        # Extractors may return plain phrase strings.
        if isinstance(value, list):
            return [{"name": v} if isinstance(v, str) else v for v in value]
        return value


AIExtractor = Callable[[str, Sequence[str], str | None], Any]


# ---------------------------------------------------------------------------
# In-process catalog matcher
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    category: str = "other"
    rating: float | None = None


DEFAULT_CATALOG: tuple[CatalogEntry, ...] = tuple(
    CatalogEntry(name=noun, category=categorize(noun)) for noun in CLOTHING_NOUNS
)


class CatalogMatcher:
    """Match catalog entries whose clothing noun appears in the text.

    The emitted name is the part of the entry actually present in the text,
    scored by how much of the entry was found.
    """

    BASE_CONFIDENCE = 0.85
    MATCH_WEIGHT = 0.10
    RATING_BONUS = 0.05
    RATING_THRESHOLD = 4.0
    MAX_CONFIDENCE = 0.98

    def __init__(
        self,
        catalog: Iterable[CatalogEntry] = DEFAULT_CATALOG,
        source: str = "catalog",
    ) -> None:
        self.catalog = tuple(catalog)
        self.source = source

    def score(self, entry: CatalogEntry, matched: int, total: int) -> float:
        confidence = self.BASE_CONFIDENCE + self.MATCH_WEIGHT * (matched / total)
        if entry.rating is not None and entry.rating > self.RATING_THRESHOLD:
            confidence += self.RATING_BONUS
        return round(min(confidence, self.MAX_CONFIDENCE), 4)

    def __call__(self, text: str) -> list[Candidate]:
        tokens = tokenize(text)
        present = set(tokens)
        # canonical noun -> the form actually written in the text
        surface: dict[str, str] = {}
        for token in tokens:
            noun = match_clothing_noun(token)
            if noun is not None:
                surface.setdefault(noun, token)

        candidates: list[Candidate] = []
        for entry in self.catalog:
            entry_tokens = tokenize(entry.name)
            noun = find_clothing_noun(entry_tokens)
            if not entry_tokens or noun is None or noun not in surface:
                continue
            found = []
            for t in entry_tokens:
                if t in present:
                    found.append(t)
                elif match_clothing_noun(t) == noun:
                    found.append(surface[noun])
            candidates.append(Candidate(
                name=" ".join(found),
                descriptors=tuple(t for t in found if is_descriptor(t)),
                category=entry.category if entry.category != "other" else categorize(entry.name),
                confidence=self.score(entry, len(found), len(entry_tokens)),
                source=self.source,
                kind="dataset",
            ))
        return candidates


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------


def parse_ai_response(raw: Any, source: str = AI_SOURCE) -> list[Candidate]:
    """Convert an AI extractor response into candidates.

    Raises:
        ExtractionSourceFailure: On ``success=False`` or a malformed payload.
    """
    try:
        if isinstance(raw, AIExtractionResponse):
            response = raw
        elif isinstance(raw, Mapping):
            response = AIExtractionResponse.model_validate(raw)
        else:
            raise ExtractionSourceFailure(source, f"unexpected response type {type(raw).__name__}")
    except ValidationError as e:
        raise ExtractionSourceFailure(source, f"malformed response: {e.error_count()} errors") from e

    if not response.success:
        raise ExtractionSourceFailure(source, response.error or "extractor reported failure")

    return [
        Candidate(
            name=item.name,
            descriptors=tuple(dict.fromkeys(d.lower() for d in item.descriptors)),
            category=categorize(item.name),
            confidence=item.confidence,
            source=source,
            kind="ai-structured",
        )
        for item in response.extracted_items or []
    ]


def check_candidates(source: str, items: Any) -> list[Candidate]:
    """Accept a source's output only if every item is a usable Candidate.

    Raises:
        ExtractionSourceFailure: On a non-iterable result, a non-Candidate
            item, a blank name, or a confidence outside [0, 1].
    """
    if items is None or isinstance(items, (str, bytes, Mapping)):
        raise ExtractionSourceFailure(source, f"expected candidates, got {type(items).__name__}")
    try:
        items = list(items)
    except TypeError as e:
        raise ExtractionSourceFailure(source, f"expected candidates, got {type(items).__name__}") from e

    for i, item in enumerate(items):
        if not isinstance(item, Candidate):
            raise ExtractionSourceFailure(source, f"item {i} is {type(item).__name__}, not Candidate")
        if not isinstance(item.name, str) or not item.name.strip():
            raise ExtractionSourceFailure(source, f"item {i} has a blank name")
        confidence = item.confidence
        if (
            isinstance(confidence, bool)
            or not isinstance(confidence, (int, float))
            or not 0.0 <= confidence <= 1.0
        ):
            raise ExtractionSourceFailure(
                source, f"item {i} ({item.name!r}) has invalid confidence {confidence!r}"
            )
    return items


def dataset_source(
    name: str, matcher: DatasetMatcher, text: str, discount: float
) -> SourceSpec:
    def run() -> list[Candidate]:
        return check_candidates(name, matcher(text))

    return SourceSpec(name=name, kind="dataset", discount=discount, run=run)


def ai_source(
    extractor: AIExtractor,
    feedback: str,
    suggestions: Sequence[str],
    item_id: str | None,
    discount: float,
) -> SourceSpec:
    def run() -> list[Candidate]:
        return parse_ai_response(extractor(feedback, list(suggestions), item_id))

    return SourceSpec(name=AI_SOURCE, kind="ai-structured", discount=discount, run=run)


def matcher_name(matcher: Any, index: int) -> str:
    name = getattr(matcher, "source", None) or getattr(matcher, "__name__", None)
    return str(name) if name else f"dataset-{index + 1}"


def apply_discount(
    candidates: list[Candidate], discount: float, kind: SourceKind, source: str | None = None
) -> list[Candidate]:
    """Scale confidences by the source discount and stamp the source kind."""
    discounted = []
    for c in candidates:
        c = replace(c, kind=kind, source=source or c.source)
        discounted.append(c.with_confidence(c.confidence * discount))
    return discounted


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------


@dataclass
class SourceOutcome:
    name: str
    candidates: list[Candidate]
    error: str | None = None


def _run_spec(spec: SourceSpec) -> list[Candidate]:
    # Checking and discounting run in the worker so bad output fails only this source.
    candidates = check_candidates(spec.name, spec.run())
    return apply_discount(candidates, spec.discount, spec.kind, spec.name)


def run_sources(
    specs: list[SourceSpec],
    max_workers: int = 4,
    log: logging.Logger | None = None,
) -> list[SourceOutcome]:
    """Run every source concurrently and wait for all of them.

    A failing source yields an outcome with ``error`` set; it never cancels
    the others. Outcomes come back in *specs* order regardless of completion
    order.

    Args:
        specs: Sources to run.
        max_workers: Thread pool size.
        log: Logger for failures (module logger if None).

    Returns:
        One SourceOutcome per source, discounted.
    """
    log = log or logger
    if not specs:
        return []

    outcomes: dict[int, SourceOutcome] = {}
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(specs)))) as executor:
        futures = {executor.submit(_run_spec, spec): i for i, spec in enumerate(specs)}
        for future in as_completed(futures):
            index = futures[future]
            spec = specs[index]
            exc = future.exception()
            if exc is not None:
                reason = exc.reason if isinstance(exc, ExtractionSourceFailure) else f"{type(exc).__name__}: {exc}"
                log.warning("Source %s failed: %s", spec.name, reason)
                outcomes[index] = SourceOutcome(name=spec.name, candidates=[], error=reason)
                continue
            candidates = future.result()
            log.debug("Source %s: %d candidates", spec.name, len(candidates))
            outcomes[index] = SourceOutcome(name=spec.name, candidates=candidates)

    return [outcomes[i] for i in range(len(specs))]
