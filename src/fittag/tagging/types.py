"""Record types flowing between tagging stages.

Provenance model:
  - Candidate: produced by a source (pattern table, dataset matcher, AI
    extractor). ``kind`` names the source family, ``source`` the concrete
    producer, ``contributors`` every producer dedup merged into it.
    Rewritten immutably by each stage.
  - StyleReference: grounding fact from the feedback's Style subsection.
    Side input to validation only.
  - ValidatedTag: a Candidate that passed validation. The only type that
    leaves the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Literal

Category = Literal[
    "tops", "bottoms", "dresses", "outerwear", "footwear", "accessories", "other"
]
SourceKind = Literal["pattern", "dataset", "ai-structured"]
Tier = Literal["basic", "medium", "advanced"]


@dataclass(frozen=True)
class Candidate:
    """Unvalidated extraction result."""

    name: str
    descriptors: tuple[str, ...] = ()
    category: Category = "other"
    confidence: float = 0.0
    source: str = "pattern"
    kind: SourceKind = "pattern"
    contributors: tuple[str, ...] = ()

    def with_confidence(self, confidence: float) -> Candidate:
        return replace(self, confidence=round(confidence, 4))


@dataclass(frozen=True)
class StyleReference:
    """Item mention grounded in the Style subsection."""

    item: str
    descriptors: tuple[str, ...]
    confidence: float
    context: str
    kind: Literal["style-reference"] = "style-reference"


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    reasons: tuple[str, ...]
    final_confidence: float


@dataclass(frozen=True)
class ValidatedTag:
    """Emitted tag. Position in the result list is significant downstream."""

    name: str
    descriptors: tuple[str, ...]
    category: Category
    confidence: float
    source: str
    contributors: tuple[str, ...] = ()

    @classmethod
    def from_candidate(
        cls, candidate: Candidate, confidence: float | None = None
    ) -> ValidatedTag:
        return cls(
            name=candidate.name,
            descriptors=candidate.descriptors,
            category=candidate.category,
            confidence=candidate.confidence if confidence is None else confidence,
            source=candidate.source,
            contributors=candidate.contributors or (candidate.source,),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "descriptors": list(self.descriptors),
            "category": self.category,
            "confidence": self.confidence,
            "source": self.source,
        }


@dataclass(frozen=True)
class SourceSpec:
    """One candidate source with its confidence discount.

    ``run`` takes no arguments; the orchestrator binds the text (and for the
    AI extractor, suggestions and item id) before dispatch.
    """

    name: str
    kind: SourceKind
    discount: float
    run: Callable[[], list[Candidate]]


@dataclass
class TaggingResult:
    tags: list[ValidatedTag] = field(default_factory=list)
    tier: Tier = "advanced"
    extraction_method: str = ""
    candidate_count: int = 0
    rejected: dict[str, list[str]] = field(default_factory=dict)
    failed_sources: dict[str, str] = field(default_factory=dict)
    style_references: list[StyleReference] = field(default_factory=list)
    processing_time: float = 0.0

    @property
    def item_count(self) -> int:
        return len(self.tags)

    @property
    def average_confidence(self) -> float:
        if not self.tags:
            return 0.0
        return round(sum(t.confidence for t in self.tags) / len(self.tags), 4)
