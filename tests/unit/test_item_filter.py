"""Tests for combination splitting and item cleanup."""
import pytest

from fittag.tagging.item_filter import (
    clean_name,
    filter_items,
    is_styling_only,
    split_combination,
)


class TestSplitCombination:

    def test_and(self):
        assert split_combination("Jeans and Tee") == ("Jeans", "Tee")

    def test_ampersand(self):
        assert split_combination("shirt & tie belt") == ("shirt", "tie belt")

    def test_one_side_not_clothing(self):
        assert split_combination("jacket with attitude") is None

    def test_no_separator(self):
        assert split_combination("black jacket") is None


class TestCleanName:

    def test_capitalizes_tokens(self):
        assert clean_name("black   JACKET") == "Black Jacket"

    def test_hyphenated_token(self):
        assert clean_name("white t-shirt") == "White T-shirt"

    def test_strips_punctuation_and_fillers(self):
        assert clean_name("the jeans,") == "Jeans"
        assert clean_name("Try loafers!") == "Loafers"


def test_is_styling_only():
    assert is_styling_only("layering")
    assert is_styling_only("great color palette")
    assert not is_styling_only("jacket layering")


class TestFilterItems:

    def test_split_children_discounted(self, make_candidate):
        kept = filter_items([make_candidate("Jeans and Tee", 0.9)])
        assert [c.name for c in kept] == ["Jeans", "Tee"]
        assert all(c.confidence == pytest.approx(0.81) for c in kept)
        assert [c.category for c in kept] == ["bottoms", "tops"]

    def test_drops_styling_and_non_clothing(self, make_candidate):
        kept = filter_items([
            make_candidate("layering"),
            make_candidate("confident look"),
            make_candidate("black jacket"),
        ])
        assert [c.name for c in kept] == ["Black Jacket"]

    def test_preserves_order_and_source(self, make_candidate):
        kept = filter_items([
            make_candidate("sneakers", source="catalog", kind="dataset"),
            make_candidate("jacket"),
        ])
        assert [(c.name, c.source) for c in kept] == [
            ("Sneakers", "catalog"),
            ("Jacket", "pattern"),
        ]
