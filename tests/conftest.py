"""Shared test fixtures."""
import pytest

from fittag.tagging.types import Candidate, StyleReference

EXAMPLE_TEXT = "She paired a black leather jacket with white sneakers."


@pytest.fixture
def example_text():
    return EXAMPLE_TEXT


@pytest.fixture
def sample_feedback():
    return (
        "**Style:** A black leather jacket layered over a white cotton tee gives "
        "the look an edge. The blue jeans keep it casual.\n"
        "**Color Coordination:** The monochrome palette works well with the denim.\n"
        "**Fit:** The jacket sits well at the shoulders.\n"
        "**Overall Impression:** A confident, polished outfit."
    )


@pytest.fixture
def sample_suggestions():
    return [
        "Try adding a brown leather belt.",
        "Swap the sneakers for white loafers.",
    ]


@pytest.fixture
def jacket_reference():
    return StyleReference(
        item="jacket",
        descriptors=("black", "leather"),
        confidence=0.95,
        context="A black leather jacket layered over a white cotton tee",
    )


@pytest.fixture
def make_candidate():
    def _make(name, confidence=0.95, descriptors=(), source="pattern", kind="pattern"):
        return Candidate(
            name=name,
            descriptors=tuple(descriptors),
            confidence=confidence,
            source=source,
            kind=kind,
        )
    return _make


@pytest.fixture
def fake_ai_extractor():
    """Build an AI extractor returning fixed phrases and recording its calls."""
    def _build(items, success=True, error=None):
        calls = []

        def extractor(feedback, suggestions, item_id):
            calls.append((feedback, list(suggestions), item_id))
            return {"success": success, "extractedItems": items, "error": error}

        extractor.calls = calls
        return extractor
    return _build
