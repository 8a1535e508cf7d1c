"""Tests for amoura.services.chat — the end-to-end answer pipeline."""

import asyncio

import httpx

from amoura.adapters.catalog import InMemoryCatalog
from amoura.adapters.llm import GeminiClient
from amoura.config import DEFAULT_CATALOG_PATH, Settings
from amoura.core.context import NO_PRODUCT_DATA
from amoura.core.models import FailureReason, GenerationOutcome
from amoura.core.prompts import STATE_EMPTY, STATE_MATCHED, STATE_RANDOM
from amoura.core.responses import BUSY_APOLOGY, GENERIC_APOLOGY
from amoura.services.chat import ChatService, generate_response

SETTINGS = Settings(gemini_api_key="test-key")


def ask(service, message):
    return asyncio.run(service.generate_response(message))


class TestChatService:
    def test_success(self, make_catalog, stub_client, product):
        catalog = make_catalog(products_by_query={"pashmina": [product()]})
        client = stub_client()
        response = ask(ChatService(catalog, client=client, settings=SETTINGS), "Pashmina?")

        assert response.text == "Halo kak 🌸"
        assert response.has_products is True
        assert [p.id for p in response.products] == [1]
        assert STATE_MATCHED in client.prompts[0]
        assert client.prompts[0].endswith("Pashmina?")

    def test_exhausted_keeps_products(self, make_catalog, stub_client, product):
        catalog = make_catalog(products_by_query={"pashmina": [product()]})
        client = stub_client(GenerationOutcome.failed(FailureReason.EXHAUSTED, 5, 503))
        response = ask(ChatService(catalog, client=client, settings=SETTINGS), "pashmina")

        assert response.text == BUSY_APOLOGY
        assert response.has_products is True

    def test_random_suggestions(self, make_catalog, stub_client, product):
        catalog = make_catalog(random_products=[product(7, "Bergo Random")])
        client = stub_client()
        response = ask(ChatService(catalog, client=client, settings=SETTINGS), "ada mobil?")

        assert STATE_RANDOM in client.prompts[0]
        assert [p.name for p in response.products] == ["Bergo Random"]

    def test_empty_catalog_puts_marker_in_prompt(self, make_catalog, stub_client):
        client = stub_client()
        response = ask(ChatService(make_catalog(), client=client, settings=SETTINGS), "hijab")

        assert NO_PRODUCT_DATA in client.prompts[0]
        assert STATE_EMPTY in client.prompts[0]
        assert response.has_products is False

    def test_catalog_down_still_answers(self, make_catalog, stub_client):
        catalog = make_catalog(fail={"search", "faq", "random"})
        response = ask(ChatService(catalog, client=stub_client(), settings=SETTINGS), "hijab")
        assert response.text == "Halo kak 🌸"
        assert response.products == ()

    def test_missing_key_gives_generic_apology(self, make_catalog, product):
        catalog = make_catalog(products_by_query={"pashmina": [product()]})
        service = ChatService(catalog, settings=Settings(gemini_api_key=None))

        assert isinstance(service.client, GeminiClient)
        response = ask(service, "pashmina")
        assert response.text == GENERIC_APOLOGY
        assert response.has_products is True

    def test_concurrent_requests_are_independent(self, make_catalog, stub_client, product):
        catalog = make_catalog(
            products_by_query={
                "pashmina": [product(1, "Pashmina")],
                "voal": [product(4, "Voal")],
            }
        )
        service = ChatService(catalog, client=stub_client(), settings=SETTINGS)

        async def go():
            return await asyncio.gather(
                service.generate_response("pashmina"),
                service.generate_response("voal"),
            )

        first, second = asyncio.run(go())
        assert [p.name for p in first.products] == ["Pashmina"]
        assert [p.name for p in second.products] == ["Voal"]


class TestEndToEnd:
    def test_recovers_from_busy_endpoint(self):
        statuses = [503, 503, 503, 200]
        delays = []

        def endpoint(request):
            status = statuses.pop(0)
            if status != 200:
                return httpx.Response(status)
            body = {"candidates": [{"content": {"parts": [{"text": "Ada kak 🌸"}]}}]}
            return httpx.Response(200, json=body)

        async def record_sleep(seconds):
            delays.append(seconds)

        async def go():
            catalog = InMemoryCatalog.from_json(DEFAULT_CATALOG_PATH, SETTINGS)
            async with httpx.AsyncClient(transport=httpx.MockTransport(endpoint)) as http:
                client = GeminiClient(SETTINGS, http_client=http, sleep=record_sleep)
                service = ChatService(catalog, client=client, settings=SETTINGS)
                return await service.generate_response("pashmina dusty pink")

        response = asyncio.run(go())
        assert response.text == "Ada kak 🌸"
        # No full-phrase match; the longest keyword "pashmina" matches both
        assert [p.id for p in response.products] == [1, 2]
        assert delays == [2.0, 4.0, 8.0]

    def test_null_parts_answer_with_apology(self, make_catalog, product):
        def endpoint(request):
            return httpx.Response(200, json={"candidates": [{"content": {"parts": None}}]})

        async def go():
            catalog = make_catalog(products_by_query={"pashmina": [product()]})
            async with httpx.AsyncClient(transport=httpx.MockTransport(endpoint)) as http:
                client = GeminiClient(SETTINGS, http_client=http)
                service = ChatService(catalog, client=client, settings=SETTINGS)
                return await service.generate_response("pashmina")

        response = asyncio.run(go())
        assert response.text == GENERIC_APOLOGY
        assert response.has_products is True

    def test_module_level_helper(self):
        catalog = InMemoryCatalog.from_json(DEFAULT_CATALOG_PATH)
        response = asyncio.run(
            generate_response("segi empat", catalog, settings=Settings(gemini_api_key=None))
        )
        assert response.text == GENERIC_APOLOGY
        assert [p.id for p in response.products] == [4]
