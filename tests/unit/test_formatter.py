"""Tests for structured name formatting."""
import pytest

from fittag.tagging.formatter import apply_structured_format, format_candidate
from fittag.tagging.vocabulary import tokenize


def test_bare_item_picks_up_context_descriptors(make_candidate, example_text):
    formatted = format_candidate(make_candidate("jacket", 0.7), tokenize(example_text))
    assert formatted.name == "black jacket"
    assert formatted.descriptors == ("black", "leather")
    assert formatted.confidence == pytest.approx(0.8)


def test_primary_descriptor_is_color_first(make_candidate, example_text):
    formatted = format_candidate(
        make_candidate("black leather jacket", 0.7), tokenize(example_text)
    )
    assert formatted.name == "black jacket"


def test_scan_stops_at_neighbouring_item(make_candidate, example_text):
    # "black" and "leather" belong to the jacket, not the sneakers.
    formatted = format_candidate(make_candidate("sneakers", 0.7), tokenize(example_text))
    assert formatted.name == "white sneakers"
    assert formatted.descriptors == ("white",)
    assert formatted.confidence == pytest.approx(0.7)


def test_bonus_is_capped_at_one(make_candidate, example_text):
    formatted = format_candidate(make_candidate("jacket", 0.95), tokenize(example_text))
    assert formatted.confidence == 1.0


def test_material_used_when_no_color(make_candidate):
    formatted = format_candidate(
        make_candidate("blazer", 0.9), tokenize("A wool blazer over a shirt.")
    )
    assert formatted.name == "wool blazer"
    assert formatted.confidence == pytest.approx(0.9)


def test_non_clothing_candidate_unchanged(make_candidate, example_text):
    candidate = make_candidate("great energy", 0.7)
    assert format_candidate(candidate, tokenize(example_text)) is candidate


def test_leading_fillers_dropped_from_core(make_candidate):
    formatted = format_candidate(
        make_candidate("wearing a jacket", 0.9), tokenize("wearing a jacket")
    )
    assert formatted.name == "jacket"


def test_apply_preserves_length(make_candidate, example_text):
    candidates = [make_candidate("jacket", 0.7), make_candidate("vibes", 0.7)]
    formatted = apply_structured_format(candidates, example_text)
    assert [c.name for c in formatted] == ["black jacket", "vibes"]
