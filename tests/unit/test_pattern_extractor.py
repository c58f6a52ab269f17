"""Tests for rule-table phrase extraction."""
from fittag.tagging.pattern_extractor import (
    PHRASE_PATTERNS,
    extract_pattern_candidates,
    is_non_wearable,
)


def test_pattern_table_order():
    assert [name for name, _ in PHRASE_PATTERNS] == [
        "color_pattern_material_item",
        "fit_item",
        "material_item",
        "item",
    ]


def test_extract_all_tiers(example_text):
    candidates = extract_pattern_candidates(example_text)
    assert [c.name for c in candidates] == [
        "black leather jacket",
        "white sneakers",
        "leather jacket",
        "jacket",
        "sneakers",
    ]


def test_candidates_are_pattern_sourced(example_text):
    for c in extract_pattern_candidates(example_text):
        assert c.confidence == 0.7
        assert c.source == "pattern"
        assert c.kind == "pattern"


def test_descriptors_and_category(example_text):
    first = extract_pattern_candidates(example_text)[0]
    assert first.descriptors == ("black", "leather")
    assert first.category == "outerwear"


def test_fit_item():
    names = [c.name for c in extract_pattern_candidates("An oversized cardigan.")]
    assert names == ["oversized cardigan", "cardigan"]


def test_color_pattern_item():
    names = [c.name for c in extract_pattern_candidates("A navy striped shirt")]
    assert "navy striped shirt" in names


def test_hyphenated_item_not_split():
    names = [c.name for c in extract_pattern_candidates("a white t-shirt")]
    assert names == ["white t-shirt", "t-shirt"]
    assert "shirt" not in names


def test_plural_items():
    names = [c.name for c in extract_pattern_candidates("Two floral dresses")]
    assert names == ["dresses"]


def test_no_clothing():
    assert extract_pattern_candidates("Great energy and confident posture.") == []


def test_empty_text():
    assert extract_pattern_candidates("") == []
    assert extract_pattern_candidates("   ") == []


def test_is_non_wearable():
    assert is_non_wearable("woman jacket")
    assert is_non_wearable("standing")
    assert not is_non_wearable("black jacket")
