"""Tests for amoura.adapters.catalog — the in-memory catalog store."""

import asyncio
import random

import pytest

from amoura.adapters.catalog import CatalogUnavailableError, InMemoryCatalog
from amoura.config import DEFAULT_CATALOG_PATH, Settings


@pytest.fixture
def catalog():
    return InMemoryCatalog.from_json(DEFAULT_CATALOG_PATH)


def run(coro):
    return asyncio.run(coro)


class TestLoad:
    def test_seed_catalog(self, catalog):
        ids = [p.id for p in catalog.active_products]
        assert ids == [1, 2, 3, 4]

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogUnavailableError):
            InMemoryCatalog.from_json(tmp_path / "nope.json")

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogUnavailableError):
            InMemoryCatalog.from_json(path)

    def test_row_without_name(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text('{"products": [{"id": 1}]}', encoding="utf-8")
        with pytest.raises(CatalogUnavailableError):
            InMemoryCatalog.from_json(path)

    def test_is_a_connection_error(self):
        assert issubclass(CatalogUnavailableError, ConnectionError)


class TestSearchProducts:
    def test_matches_name_case_insensitive(self, catalog):
        names = [p.name for p in run(catalog.search_products("PASHMINA"))]
        assert names == ["Pashmina Ceruty Babydoll", "Pashmina Silk Dusty Pink"]

    def test_matches_description(self, catalog):
        ids = [p.id for p in run(catalog.search_products("hijab"))]
        assert ids == [3, 4]

    def test_matches_category_name(self, catalog):
        ids = [p.id for p in run(catalog.search_products("square"))]
        assert ids == [4]

    def test_inactive_products_excluded(self, catalog):
        assert run(catalog.search_products("bergo")) == []

    def test_whole_query_must_match(self, catalog):
        assert run(catalog.search_products("pashmina voal")) == []

    def test_empty_query(self, catalog):
        assert run(catalog.search_products("")) == []
        assert run(catalog.search_products("   ")) == []

    def test_limit(self):
        settings = Settings(product_limit=1)
        catalog = InMemoryCatalog.from_json(DEFAULT_CATALOG_PATH, settings)
        assert len(run(catalog.search_products("pashmina"))) == 1


class TestGetFaq:
    def test_matches_question(self, catalog):
        faqs = run(catalog.get_faq("pengiriman"))
        assert [f.question for f in faqs] == ["Berapa lama pengiriman?"]

    def test_matches_answer(self, catalog):
        faqs = run(catalog.get_faq("whatsapp"))
        assert [f.question for f in faqs] == ["Bagaimana cara retur?"]

    def test_no_match(self, catalog):
        assert run(catalog.get_faq("mobil")) == []


class TestRandomProducts:
    def test_sample_of_active_products(self):
        catalog = InMemoryCatalog.from_json(DEFAULT_CATALOG_PATH)
        sample = run(catalog.get_random_products())
        assert len(sample) == 3
        assert len({p.id for p in sample}) == 3
        assert all(p.is_active for p in sample)

    def test_seeded_rng_is_repeatable(self, product):
        products = [product(i, f"P{i}") for i in range(1, 8)]
        first = InMemoryCatalog(products, rng=random.Random(7))
        second = InMemoryCatalog(products, rng=random.Random(7))
        assert run(first.get_random_products()) == run(second.get_random_products())

    def test_small_catalog(self, product):
        catalog = InMemoryCatalog([product()])
        assert len(run(catalog.get_random_products())) == 1

    def test_empty_catalog(self):
        catalog = InMemoryCatalog([])
        assert run(catalog.get_random_products()) == []
        assert run(catalog.ping()) is False


class TestPing:
    def test_ready(self, catalog):
        assert run(catalog.ping()) is True
