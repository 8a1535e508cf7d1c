"""Tests for amoura.core.responses — final response assembly."""

from amoura.core.models import FailureReason, GenerationOutcome, SearchResult
from amoura.core.responses import (
    BUSY_APOLOGY,
    GENERIC_APOLOGY,
    apology_for,
    assemble_response,
    fallback_response,
)


class TestApologyFor:
    def test_exhausted_is_busy(self):
        assert apology_for(FailureReason.EXHAUSTED) == BUSY_APOLOGY

    def test_others_are_generic(self):
        assert apology_for(FailureReason.PERMANENT) == GENERIC_APOLOGY
        assert apology_for(FailureReason.CONFIGURATION) == GENERIC_APOLOGY
        assert apology_for(None) == GENERIC_APOLOGY


class TestAssembleResponse:
    def test_success_text_is_stripped(self, product):
        result = SearchResult(products=[product()])
        response = assemble_response(GenerationOutcome.success("  Halo kak 🌸\n", 1), result)
        assert response.text == "Halo kak 🌸"
        assert response.has_products is True
        assert response.products == (product(),)

    def test_failure_keeps_products(self, product):
        result = SearchResult(products=[product(1, "A"), product(2, "B")])
        outcome = GenerationOutcome.failed(FailureReason.EXHAUSTED, 5, 503)
        response = assemble_response(outcome, result)
        assert response.text == BUSY_APOLOGY
        assert [p.name for p in response.products] == ["A", "B"]
        assert response.has_products is True

    def test_no_products(self):
        response = assemble_response(GenerationOutcome.success("hai", 1), SearchResult())
        assert response.products == ()
        assert response.has_products is False

    def test_apology_has_no_technical_detail(self):
        outcome = GenerationOutcome.failed(FailureReason.PERMANENT, 1, 400)
        text = assemble_response(outcome, SearchResult()).text
        assert "400" not in text
        assert "Gemini" not in text


class TestFallbackResponse:
    def test_without_result(self):
        response = fallback_response()
        assert response.text == GENERIC_APOLOGY
        assert response.has_products is False

    def test_with_result(self, product):
        response = fallback_response(SearchResult(products=[product()]))
        assert response.has_products is True
