"""
Catalog store adapter.

Defines the interface the search pipeline consumes and an in-memory
implementation loaded from a JSON export of the shop database.

Matching follows the shop's SQL queries:
- products: active only, case-insensitive substring of the whole query in
  name, description or category name, capped at ``product_limit``
- FAQ: active only, substring in question or answer, capped at ``faq_limit``
- random sample: ``random_sample_size`` active products
"""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Protocol

from amoura.config import Settings, get_logger
from amoura.core.models import FaqEntry, Product

logger = get_logger(__name__)


class CatalogUnavailableError(ConnectionError):
    """The catalog could not be read."""


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


class CatalogStore(Protocol):
    """Read-only catalog lookups used by the search pipeline."""

    async def search_products(self, query: str) -> list[Product]:
        ...

    async def get_faq(self, query: str) -> list[FaqEntry]:
        ...

    async def get_random_products(self) -> list[Product]:
        ...


# ---------------------------------------------------------------------------
# In-memory implementation
# ---------------------------------------------------------------------------


def _contains(needle: str, *haystacks: str | None) -> bool:
    return any(needle in (h or "").lower() for h in haystacks)


class InMemoryCatalog:
    """
    Catalog held in memory.

    Records are frozen dataclasses, and every call returns a new list, so
    concurrent requests never observe each other.
    """

    def __init__(
        self,
        products: list[Product],
        faqs: list[FaqEntry] | None = None,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ):
        settings = settings or Settings()
        self._products = tuple(products)
        self._faqs = tuple(faqs or ())
        self.product_limit = settings.product_limit
        self.faq_limit = settings.faq_limit
        self.random_sample_size = settings.random_sample_size
        self._rng = rng or random.Random()

    @classmethod
    def from_json(cls, path: Path, settings: Settings | None = None) -> InMemoryCatalog:
        """
        Load a catalog export: ``{"products": [...], "faqs": [...]}``.

        Raises:
            CatalogUnavailableError: If the file is missing or malformed.
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            products = [Product.from_record(r) for r in data.get("products", [])]
            faqs = [FaqEntry.from_record(r) for r in data.get("faqs", [])]
        except (OSError, ValueError, KeyError, AttributeError) as exc:
            raise CatalogUnavailableError(f"Cannot load catalog from {path}: {exc}") from exc

        logger.info("Catalog loaded: %d products, %d FAQ entries", len(products), len(faqs))
        return cls(products, faqs, settings=settings)

    @property
    def active_products(self) -> list[Product]:
        return [p for p in self._products if p.is_active]

    async def search_products(self, query: str) -> list[Product]:
        needle = (query or "").strip().lower()
        if not needle:
            return []
        matches = [
            p
            for p in self.active_products
            if _contains(needle, p.name, p.description, p.category_name)
        ]
        return matches[: self.product_limit]

    async def get_faq(self, query: str) -> list[FaqEntry]:
        needle = (query or "").strip().lower()
        if not needle:
            return []
        matches = [
            f for f in self._faqs if f.is_active and _contains(needle, f.question, f.answer)
        ]
        return matches[: self.faq_limit]

    async def get_random_products(self) -> list[Product]:
        pool = self.active_products
        return self._rng.sample(pool, min(self.random_sample_size, len(pool)))

    async def ping(self) -> bool:
        """Health probe: True when the catalog has at least one active product."""
        return bool(self.active_products)


__all__ = ["CatalogStore", "CatalogUnavailableError", "InMemoryCatalog"]
