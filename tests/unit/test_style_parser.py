"""Tests for Style subsection parsing."""
import pytest

from fittag.tagging.style_parser import (
    BASE_CONFIDENCE,
    extract_style_references,
    find_style_section,
)


class TestFindStyleSection:

    def test_section_ends_at_next_marker(self, sample_feedback):
        section = find_style_section(sample_feedback)
        assert section.startswith("A black leather jacket")
        assert section.endswith("keep it casual.")
        assert "denim" not in section
        assert "shoulders" not in section

    def test_plain_marker_without_bold(self):
        text = "Style: A navy blazer. Fit: Slightly loose."
        assert find_style_section(text) == "A navy blazer."

    def test_section_runs_to_end_of_text(self):
        assert find_style_section("Style: white sneakers") == "white sneakers"

    def test_no_marker(self, example_text):
        assert find_style_section(example_text) is None
        assert find_style_section("") is None


class TestExtractStyleReferences:

    def test_references_in_mention_order(self, sample_feedback):
        refs = extract_style_references(sample_feedback)
        assert [r.item for r in refs] == ["jacket", "tee", "jeans"]
        assert [r.confidence for r in refs] == [0.95, 0.95, 0.9]

    def test_descriptors_from_window(self, sample_feedback):
        jacket, tee, jeans = extract_style_references(sample_feedback)
        assert jacket.descriptors == ("black", "leather")
        assert tee.descriptors == ("white", "cotton")
        assert jeans.descriptors == ("blue",)

    def test_context_is_containing_sentence(self, sample_feedback):
        refs = extract_style_references(sample_feedback)
        assert refs[2].context == "The blue jeans keep it casual"
        assert refs[0].kind == "style-reference"

    def test_bare_item_has_base_confidence(self):
        refs = extract_style_references("Style: The scarf adds interest.")
        assert len(refs) == 1
        assert refs[0].confidence == BASE_CONFIDENCE
        assert refs[0].descriptors == ()

    def test_repeated_descriptor_counts_once(self):
        [ref] = extract_style_references("Style: black leather, leather jacket")
        assert ref.descriptors == ("black", "leather")
        assert ref.confidence == pytest.approx(0.95)

    def test_confidence_is_capped(self):
        refs = extract_style_references("Style: black striped silk scarf")
        assert refs[0].confidence == pytest.approx(0.98)

    def test_items_outside_style_section_ignored(self):
        text = "**Fit:** The blazer is tailored.\n**Style:** Relaxed and casual."
        assert extract_style_references(text) == []

    def test_no_style_section(self, example_text):
        assert extract_style_references(example_text) == []
