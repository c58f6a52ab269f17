"""Strict emission gate for candidates.

The validator never raises. Every failing rule adds a reason, and a
candidate is emitted only if no hard rule failed.
"""

from __future__ import annotations

import logging

from .types import Candidate, StyleReference, ValidatedTag, ValidationResult
from .vocabulary import (
    descriptor_slot,
    find_clothing_noun,
    is_descriptor,
    is_forbidden,
    match_clothing_noun,
    tokenize,
)

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 0.90
MAX_CONFIDENCE = 0.98
MAX_TOKENS = 2

DESCRIPTOR_AGREEMENT_FACTOR = 0.8
UNGROUNDED_FACTOR = 0.4
UNRECOGNIZED_DESCRIPTOR_FACTOR = 0.9


def style_agreement_factor(
    candidate: Candidate, references: list[StyleReference] | None
) -> float:
    """Multiplier from agreement with Style subsection references.

    Feedback without a Style subsection carries no grounding evidence for
    or against any item, so the factor is neutral there and the other
    rules decide alone. An empty subsection is different: it was written
    and names nothing, so candidates count as ungrounded.

    Args:
        candidate: Candidate being validated.
        references: References from the Style subsection, or None when the
            feedback has no Style subsection (no grounding evidence either way).

    Returns:
        Best matching reference confidence on an item match, 0.8 on a
        descriptor-only match, 0.4 when nothing agrees, 1.0 with no section.
    """
    if references is None:
        return 1.0

    tokens = tokenize(candidate.name)
    noun = find_clothing_noun(tokens)
    item_matches = [r.confidence for r in references if noun is not None and r.item == noun]
    if item_matches:
        return max(item_matches)

    descriptors = {d.lower() for d in candidate.descriptors}
    descriptors.update(t for t in tokens if descriptor_slot(t))
    if any(descriptors.intersection(r.descriptors) for r in references):
        return DESCRIPTOR_AGREEMENT_FACTOR
    return UNGROUNDED_FACTOR


def validate_candidate(
    candidate: Candidate, references: list[StyleReference] | None = None
) -> ValidationResult:
    """Run every rule against *candidate* and collect the failures."""
    reasons: list[str] = []
    valid = True
    tokens = candidate.name.split()
    lowered = [t.lower() for t in tokens]

    if candidate.confidence < MIN_CONFIDENCE:
        valid = False
        reasons.append(
            f"Confidence {candidate.confidence:.2f} below minimum {MIN_CONFIDENCE:.2f}"
        )

    if len(tokens) > MAX_TOKENS:
        valid = False
        reasons.append(f"Token count {len(tokens)} exceeds maximum of {MAX_TOKENS}")
    elif not tokens:
        valid = False
        reasons.append("Token count 0: empty name")

    forbidden = [t for t in lowered if is_forbidden(t)]
    if forbidden:
        valid = False
        reasons.append(f"Contains forbidden words: {', '.join(forbidden)}")

    if find_clothing_noun(lowered) is None:
        valid = False
        reasons.append("No recognized clothing noun")

    final = min(candidate.confidence * style_agreement_factor(candidate, references), MAX_CONFIDENCE)

    if len(tokens) == 2:
        if not is_descriptor(lowered[0]):
            final *= UNRECOGNIZED_DESCRIPTOR_FACTOR
            reasons.append(f"Unrecognized descriptor '{tokens[0]}' (soft penalty)")
        if match_clothing_noun(lowered[1]) is None:
            valid = False
            reasons.append(f"Second token '{tokens[1]}' is not a clothing noun")
    elif len(tokens) == 1 and match_clothing_noun(lowered[0]) is None:
        valid = False
        reasons.append(f"Single token '{tokens[0]}' is not a clothing noun")

    final = round(final, 4)
    if final < MIN_CONFIDENCE:
        valid = False
        reasons.append(
            f"Final confidence {final:.2f} below minimum {MIN_CONFIDENCE:.2f}"
        )

    return ValidationResult(is_valid=valid, reasons=tuple(reasons), final_confidence=final)


def validate_candidates(
    candidates: list[Candidate], references: list[StyleReference] | None = None
) -> tuple[list[ValidatedTag], dict[str, list[str]]]:
    """Validate in order.

    Returns:
        (accepted tags carrying their final confidence, rejected name -> reasons)
    """
    accepted: list[ValidatedTag] = []
    rejected: dict[str, list[str]] = {}
    for candidate in candidates:
        result = validate_candidate(candidate, references)
        if result.is_valid:
            accepted.append(ValidatedTag.from_candidate(candidate, result.final_confidence))
        else:
            rejected[candidate.name] = list(result.reasons)
            logger.debug("Rejected %r: %s", candidate.name, "; ".join(result.reasons))
    return accepted, rejected
