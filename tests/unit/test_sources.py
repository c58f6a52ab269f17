"""Tests for candidate sources and the concurrent source runner."""
import threading

import pytest

from fittag.tagging.errors import ExtractionSourceFailure
from fittag.tagging.sources import (
    AIExtractionResponse,
    CatalogEntry,
    CatalogMatcher,
    DatasetMatcher,
    ai_source,
    apply_discount,
    check_candidates,
    dataset_source,
    matcher_name,
    parse_ai_response,
    run_sources,
)
from fittag.tagging.types import Candidate, SourceSpec


class TestCatalogMatcher:

    def test_default_catalog(self, example_text):
        candidates = CatalogMatcher()(example_text)
        assert [(c.name, c.category, c.confidence) for c in candidates] == [
            ("jacket", "outerwear", 0.95),
            ("sneakers", "footwear", 0.95),
        ]
        assert all(c.kind == "dataset" and c.source == "catalog" for c in candidates)

    def test_partial_match_and_rating_bonus(self):
        matcher = CatalogMatcher([CatalogEntry("black leather jacket", "outerwear", 4.5)])
        [candidate] = matcher("She wore a black jacket.")
        assert candidate.name == "black jacket"
        assert candidate.descriptors == ("black",)
        assert candidate.confidence == pytest.approx(0.9667)

    def test_noun_absent(self):
        matcher = CatalogMatcher([CatalogEntry("wool coat", "outerwear")])
        assert matcher("A denim jacket.") == []

    def test_is_dataset_matcher(self):
        assert isinstance(CatalogMatcher(), DatasetMatcher)


class TestParseAIResponse:

    def test_camel_case_items(self):
        candidates = parse_ai_response({
            "success": True,
            "extractedItems": [
                {"name": "Black Jacket", "descriptors": ["Black"], "confidence": 0.9},
                "White Sneakers",
            ],
        })
        assert [(c.name, c.confidence) for c in candidates] == [
            ("Black Jacket", 0.9),
            ("White Sneakers", 0.95),
        ]
        assert candidates[0].descriptors == ("black",)
        assert candidates[1].category == "footwear"
        assert all(c.kind == "ai-structured" for c in candidates)

    def test_model_instance(self):
        response = AIExtractionResponse(success=True, extracted_items=[{"name": "Tee"}])
        assert [c.name for c in parse_ai_response(response)] == ["Tee"]

    def test_success_without_items(self):
        assert parse_ai_response({"success": True}) == []

    def test_reported_failure(self):
        with pytest.raises(ExtractionSourceFailure, match="rate limited") as exc_info:
            parse_ai_response({"success": False, "error": "rate limited"})
        assert exc_info.value.source == "ai-structured"

    def test_malformed_payload(self):
        with pytest.raises(ExtractionSourceFailure, match="malformed"):
            parse_ai_response({"success": True, "extractedItems": [{"name": "  "}]})

    def test_wrong_type(self):
        with pytest.raises(ExtractionSourceFailure, match="unexpected response type"):
            parse_ai_response(["Black Jacket"])


def test_apply_discount_stamps_source(make_candidate):
    [c] = apply_discount([make_candidate("jacket", 0.95)], 0.95, "dataset", "catalog")
    assert c.confidence == pytest.approx(0.9025)
    assert (c.kind, c.source) == ("dataset", "catalog")


def test_matcher_name():
    def lookbook(text):
        return []

    assert matcher_name(CatalogMatcher(source="stylebook"), 0) == "stylebook"
    assert matcher_name(lookbook, 0) == "lookbook"
    assert matcher_name(object(), 1) == "dataset-2"


def test_ai_source_forwards_arguments(fake_ai_extractor):
    extractor = fake_ai_extractor(["Black Jacket"])
    spec = ai_source(extractor, "feedback", ["tip"], "outfit-1", 0.9)
    assert spec.kind == "ai-structured"
    assert [c.name for c in spec.run()] == ["Black Jacket"]
    assert extractor.calls == [("feedback", ["tip"], "outfit-1")]


class TestRunSources:

    def test_outcomes_in_spec_order_and_discounted(self, example_text):
        specs = [
            dataset_source("catalog", CatalogMatcher(), example_text, 0.95),
            dataset_source("second", CatalogMatcher(), example_text, 0.85),
        ]
        outcomes = run_sources(specs)
        assert [o.name for o in outcomes] == ["catalog", "second"]
        assert outcomes[0].candidates[0].confidence == pytest.approx(0.9025)
        assert outcomes[1].candidates[0].confidence == pytest.approx(0.8075)
        assert outcomes[1].candidates[0].source == "second"

    def test_failure_is_isolated(self, example_text):
        def broken():
            raise RuntimeError("catalog offline")

        specs = [
            SourceSpec(name="broken", kind="dataset", discount=0.95, run=broken),
            dataset_source("catalog", CatalogMatcher(), example_text, 0.95),
        ]
        outcomes = run_sources(specs)
        assert outcomes[0].error == "RuntimeError: catalog offline"
        assert outcomes[0].candidates == []
        assert outcomes[1].error is None
        assert len(outcomes[1].candidates) == 2

    def test_extraction_failure_reason(self):
        def failing():
            raise ExtractionSourceFailure("ai-structured", "timeout")

        [outcome] = run_sources(
            [SourceSpec(name="ai-structured", kind="ai-structured", discount=0.9, run=failing)]
        )
        assert outcome.error == "timeout"

    def test_sources_run_concurrently(self):
        barrier = threading.Barrier(2, timeout=5)

        def waiting():
            barrier.wait()
            return [Candidate(name="jacket", confidence=0.9)]

        specs = [
            SourceSpec(name=f"s{i}", kind="dataset", discount=1.0, run=waiting)
            for i in range(2)
        ]
        outcomes = run_sources(specs, max_workers=2)
        assert all(o.error is None for o in outcomes)

    def test_no_specs(self):
        assert run_sources([]) == []


class TestCheckCandidates:

    def test_accepts_candidates(self):
        items = (c for c in [Candidate(name="jacket", confidence=0.9)])
        assert [c.name for c in check_candidates("catalog", items)] == ["jacket"]

    @pytest.mark.parametrize("result", [None, "black jacket", {"name": "jacket"}, 42])
    def test_rejects_non_candidate_collections(self, result):
        with pytest.raises(ExtractionSourceFailure, match="expected candidates") as exc_info:
            check_candidates("catalog", result)
        assert exc_info.value.source == "catalog"

    def test_rejects_plain_strings(self):
        with pytest.raises(ExtractionSourceFailure, match="item 0 is str, not Candidate"):
            check_candidates("catalog", ["black jacket"])

    def test_rejects_blank_name(self):
        with pytest.raises(ExtractionSourceFailure, match="item 1 has a blank name"):
            check_candidates("catalog", [Candidate(name="jacket"), Candidate(name="  ")])

    @pytest.mark.parametrize("confidence", [None, "high", True, 1.5, -0.1])
    def test_rejects_invalid_confidence(self, confidence):
        with pytest.raises(ExtractionSourceFailure, match="invalid confidence"):
            check_candidates("catalog", [Candidate(name="jacket", confidence=confidence)])


class TestMalformedMatcherOutput:

    def test_strings_fail_only_that_source(self, example_text):
        specs = [
            dataset_source("strings", lambda text: ["black jacket"], example_text, 0.95),
            dataset_source("catalog", CatalogMatcher(), example_text, 0.95),
        ]
        outcomes = run_sources(specs)
        assert outcomes[0].candidates == []
        assert "not Candidate" in outcomes[0].error
        assert outcomes[1].error is None
        assert len(outcomes[1].candidates) == 2

    def test_missing_confidence_fails_the_source(self):
        spec = SourceSpec(
            name="raw",
            kind="dataset",
            discount=0.95,
            run=lambda: [Candidate(name="jacket", confidence=None)],
        )
        [outcome] = run_sources([spec])
        assert outcome.candidates == []
        assert "invalid confidence None" in outcome.error

    def test_none_result_fails_the_source(self):
        spec = SourceSpec(name="empty", kind="dataset", discount=0.95, run=lambda: None)
        [outcome] = run_sources([spec])
        assert outcome.error == "expected candidates, got NoneType"


def test_catalog_emits_the_written_singular():
    [candidate] = CatalogMatcher([CatalogEntry("sneakers", "footwear")])("a white sneaker")
    assert candidate.name == "sneaker"
    assert candidate.category == "footwear"


def test_catalog_ignores_non_garment_senses():
    assert CatalogMatcher()("The hem falls short and the palette feels flat.") == []
