"""Shared test doubles for the catalog and the generation client."""

import pytest

from amoura.adapters.catalog import CatalogUnavailableError
from amoura.core.models import FaqEntry, GenerationOutcome, Product


class FakeCatalog:
    """Catalog whose answers are scripted per query; records every call."""

    def __init__(
        self,
        products_by_query=None,
        faqs_by_query=None,
        random_products=None,
        fail=(),
    ):
        self.products_by_query = products_by_query or {}
        self.faqs_by_query = faqs_by_query or {}
        self.random_products = random_products or []
        self.fail = set(fail)
        self.calls = []

    @property
    def search_queries(self):
        return [arg for name, arg in self.calls if name == "search"]

    def count(self, name):
        return sum(1 for call, _ in self.calls if call == name)

    async def search_products(self, query):
        self.calls.append(("search", query))
        if "search" in self.fail:
            raise CatalogUnavailableError("catalog down")
        return list(self.products_by_query.get(query, []))

    async def get_faq(self, query):
        self.calls.append(("faq", query))
        if "faq" in self.fail:
            raise CatalogUnavailableError("catalog down")
        return list(self.faqs_by_query.get(query, []))

    async def get_random_products(self):
        self.calls.append(("random", None))
        if "random" in self.fail:
            raise CatalogUnavailableError("catalog down")
        return list(self.random_products)

    async def ping(self):
        if "ping" in self.fail:
            raise CatalogUnavailableError("catalog down")
        return True


class StubClient:
    """Generation client returning a fixed outcome and recording prompts."""

    model = "stub-model"

    def __init__(self, outcome=None):
        self.outcome = outcome or GenerationOutcome.success("Halo kak 🌸", attempts=1)
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        return self.outcome


def make_product(product_id=1, name="Pashmina Ceruty Babydoll", **fields):
    defaults = {
        "category_name": "Pashmina",
        "price": 45000,
        "stock": 10,
        "description": "Pashmina ceruty premium.",
    }
    defaults.update(fields)
    return Product(id=product_id, name=name, **defaults)


@pytest.fixture
def make_catalog():
    return FakeCatalog


@pytest.fixture
def stub_client():
    return StubClient


@pytest.fixture
def product():
    return make_product


@pytest.fixture
def faq():
    return FaqEntry(
        question="Berapa lama pengiriman?",
        answer="Pengiriman 2-3 hari kerja untuk Jabodetabek.",
    )
