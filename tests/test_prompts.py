"""Tests for amoura.core.prompts — prompt assembly and state notes."""

from amoura.core.context import NO_FAQ_DATA, NO_PRODUCT_DATA
from amoura.core.models import SearchResult
from amoura.core.prompts import (
    GROUNDING_RULES,
    PERSONA_PROMPT,
    STATE_EMPTY,
    STATE_MATCHED,
    STATE_RANDOM,
    build_chat_prompt,
    build_state_note,
)


class TestBuildStateNote:
    def test_matched(self, product):
        assert build_state_note(SearchResult(products=[product()])) == STATE_MATCHED

    def test_random(self, product):
        result = SearchResult(products=[product()], is_random_recommendation=True)
        assert build_state_note(result) == STATE_RANDOM

    def test_empty_wins_over_random_flag(self):
        result = SearchResult(products=[], is_random_recommendation=True)
        assert build_state_note(result) == STATE_EMPTY


class TestBuildChatPrompt:
    def test_marker_present_when_no_products(self):
        prompt = build_chat_prompt("ada pashmina?", SearchResult())
        assert NO_PRODUCT_DATA in prompt
        assert NO_FAQ_DATA in prompt

    def test_marker_absent_when_products(self, product):
        prompt = build_chat_prompt("ada pashmina?", SearchResult(products=[product()]))
        assert NO_PRODUCT_DATA not in prompt
        assert "[1] Nama: Pashmina Ceruty Babydoll" in prompt

    def test_rules_do_not_contain_marker(self):
        assert NO_PRODUCT_DATA not in GROUNDING_RULES
        assert NO_PRODUCT_DATA not in PERSONA_PROMPT

    def test_section_order(self, product, faq):
        result = SearchResult(products=[product()], faqs=[faq])
        prompt = build_chat_prompt("ongkir berapa?", result)
        positions = [
            prompt.index(PERSONA_PROMPT),
            prompt.index("=== PRODUCT DATA ==="),
            prompt.index("=== FAQ DATA ==="),
            prompt.index(STATE_MATCHED),
            prompt.index(GROUNDING_RULES),
            prompt.index("=== CUSTOMER MESSAGE ==="),
        ]
        assert positions == sorted(positions)
        assert "T: Berapa lama pengiriman?" in prompt

    def test_message_is_last(self):
        prompt = build_chat_prompt("Halo kak, ada bergo?", SearchResult())
        assert prompt.endswith("Halo kak, ada bergo?")

    def test_message_inserted_verbatim(self):
        message = "warna {merah} & {hitam} ada? 100%"
        prompt = build_chat_prompt(message, SearchResult())
        assert prompt.endswith(message)

    def test_random_state_note(self, product):
        result = SearchResult(products=[product()], is_random_recommendation=True)
        prompt = build_chat_prompt("ada mobil?", result)
        assert STATE_RANDOM in prompt
        assert STATE_MATCHED not in prompt

    def test_is_pure(self, product):
        result = SearchResult(products=[product()])
        assert build_chat_prompt("x", result) == build_chat_prompt("x", result)
        assert len(result.products) == 1
