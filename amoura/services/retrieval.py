"""
Catalog search service.

Tiered search, each tier running only if the previous one found nothing:
A. Direct: the full normalized message
B. Smart: the keywords joined by spaces (skipped when identical to A)
C. Keyword: each keyword alone, longest first, first hit wins
D. Random: a random sample of active products, flagged as a suggestion

FAQ lookup runs once, with the Tier A query. Result caps belong to the
catalog; this service never trims what the catalog returns. A failing
catalog call counts as an empty result for that tier.
"""

from __future__ import annotations

from typing import Awaitable, Callable, TypeVar

from amoura.adapters.catalog import CatalogStore
from amoura.api.metrics import observe_search_duration, record_search_tier
from amoura.config import get_logger
from amoura.config.logging import preview
from amoura.core.models import Product, Query, SearchResult, SearchTier
from amoura.core.query import normalize_query
from amoura.utils import timed_operation

logger = get_logger(__name__)

T = TypeVar("T")


def order_keywords(keywords: tuple[str, ...] | list[str]) -> list[str]:
    """
    Longest keyword first; equal lengths keep first-occurrence order.

    Duplicates are dropped so no keyword is searched twice.
    """
    unique = list(dict.fromkeys(keywords))
    return sorted(unique, key=len, reverse=True)


class SearchPipeline:
    """
    Runs the search tiers against a catalog store.

    Holds no per-request state, so one instance serves concurrent requests.
    """

    def __init__(self, catalog: CatalogStore):
        self.catalog = catalog

    async def _safe_call(
        self,
        lookup: Callable[..., Awaitable[list[T]]],
        *args: str,
        tier: str,
    ) -> list[T]:
        """Run one catalog call; any failure becomes an empty result."""
        try:
            return list(await lookup(*args))
        except Exception:
            logger.warning(
                "Catalog call failed, treating as empty",
                extra={"tier": tier, "lookup": getattr(lookup, "__name__", "?")},
                exc_info=True,
            )
            return []

    async def _search_products(self, query: str, tier: SearchTier) -> list[Product]:
        return await self._safe_call(self.catalog.search_products, query, tier=tier.value)

    async def search(self, query: Query) -> SearchResult:
        """
        Find products and FAQ entries for a normalized query.

        Args:
            query: Output of ``normalize_query``.

        Returns:
            SearchResult from the first tier that found products, or the
            random sample when none did.
        """
        with timed_operation("Catalog search", logger, observe_search_duration):
            result = await self._run_tiers(query)

        record_search_tier(result.tier.value)
        logger.info(
            "Search finished",
            extra={
                "tier": result.tier.value,
                "products": len(result.products),
                "faqs": len(result.faqs),
                "query": preview(query.normalized),
            },
        )
        return result

    async def _run_tiers(self, query: Query) -> SearchResult:
        faqs = await self._safe_call(self.catalog.get_faq, query.normalized, tier="faq")

        # Tier A
        products = await self._search_products(query.normalized, SearchTier.DIRECT)
        if products:
            return SearchResult(products=products, faqs=faqs, tier=SearchTier.DIRECT)

        # Tier B
        smart_query = query.smart_query
        if smart_query and smart_query != query.normalized:
            products = await self._search_products(smart_query, SearchTier.SMART)
            if products:
                return SearchResult(products=products, faqs=faqs, tier=SearchTier.SMART)

        # Tier C
        for keyword in order_keywords(query.keywords):
            products = await self._search_products(keyword, SearchTier.KEYWORD)
            if products:
                logger.debug("Keyword fallback matched on %r", keyword)
                return SearchResult(products=products, faqs=faqs, tier=SearchTier.KEYWORD)

        # Tier D
        products = await self._safe_call(
            self.catalog.get_random_products, tier=SearchTier.RANDOM.value
        )
        return SearchResult(
            products=products,
            faqs=faqs,
            tier=SearchTier.RANDOM,
            is_random_recommendation=True,
        )


async def search_catalog(message: str, catalog: CatalogStore) -> SearchResult:
    """Convenience wrapper: normalize a raw message and search once."""
    return await SearchPipeline(catalog).search(normalize_query(message))
