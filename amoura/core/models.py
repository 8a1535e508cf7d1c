"""
Core domain models for the Amoura shopping assistant.

All dataclasses are consolidated here so every layer shares one
definition of the catalog records, the search result, the generation
outcome and the response contract.

Every model is built fresh for a single chat request and discarded
afterwards. ``Product`` and ``FaqEntry`` are owned by the catalog and are
never mutated here (they are frozen).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ============================================================================
# ATTRIBUTE DECODING
# ============================================================================


def parse_attribute_list(value: Any) -> list:
    """
    Decode a colors/materials/variants field into a list.

    Catalog rows store these either as a real list or as a JSON-encoded
    string. Anything that does not decode to a list becomes ``[]``.

    Args:
        value: Raw field value from the catalog.

    Returns:
        The decoded list (a new list, the input is never modified).
    """
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except ValueError:
            return []
        return list(decoded) if isinstance(decoded, list) else []
    return []


# ============================================================================
# QUERY
# ============================================================================


@dataclass(frozen=True)
class Query:
    """A user message after normalization."""

    raw: str
    normalized: str
    keywords: tuple[str, ...] = ()

    @property
    def smart_query(self) -> str:
        """Keywords joined back into a single search string."""
        return " ".join(self.keywords)


# ============================================================================
# CATALOG RECORDS
# ============================================================================


@dataclass(frozen=True)
class Product:
    """
    A catalog product as returned by the catalog collaborator.

    ``colors``, ``materials`` and ``variants`` are kept exactly as they
    arrived (list or JSON string); use the ``*_list`` properties to read
    them decoded.
    """

    id: int | str
    name: str
    category_name: str | None = None
    price: float | int | str | None = None
    stock: int | None = None
    description: str | None = None
    is_featured: bool = False
    is_active: bool = True
    marketplace_url: str | None = None
    slug: str | None = None
    image_url: str | None = None
    colors: Any = None
    materials: Any = None
    variants: Any = None

    @property
    def color_list(self) -> list:
        return parse_attribute_list(self.colors)

    @property
    def material_list(self) -> list:
        return parse_attribute_list(self.materials)

    @property
    def variant_list(self) -> list:
        return parse_attribute_list(self.variants)

    def to_summary(self) -> dict:
        """Serializable summary for API responses (attribute lists decoded)."""
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "category": self.category_name,
            "price": self.price,
            "stock": self.stock,
            "image_url": self.image_url,
            "marketplace_url": self.marketplace_url,
            "is_featured": self.is_featured,
            "colors": self.color_list,
            "materials": self.material_list,
            "variants": self.variant_list,
        }

    @classmethod
    def from_record(cls, record: dict) -> Product:
        """Build a Product from a catalog row (camelCase or snake_case keys)."""
        category = record.get("category")
        category_name = record.get("category_name", record.get("categoryName"))
        if category_name is None and isinstance(category, dict):
            category_name = category.get("name")
        elif category_name is None and isinstance(category, str):
            category_name = category

        def pick(snake: str, camel: str, default: Any = None) -> Any:
            return record.get(snake, record.get(camel, default))

        return cls(
            id=record["id"],
            name=record["name"],
            category_name=category_name,
            price=record.get("price"),
            stock=record.get("stock"),
            description=record.get("description"),
            is_featured=bool(pick("is_featured", "isFeatured", False)),
            is_active=bool(pick("is_active", "isActive", True)),
            marketplace_url=pick("marketplace_url", "marketplaceUrl"),
            slug=record.get("slug"),
            image_url=pick("image_url", "imageUrl"),
            colors=record.get("colors"),
            materials=record.get("materials"),
            variants=record.get("variants"),
        )


@dataclass(frozen=True)
class FaqEntry:
    """A frequently asked question with its stored answer."""

    question: str
    answer: str
    is_active: bool = True

    @classmethod
    def from_record(cls, record: dict) -> FaqEntry:
        return cls(
            question=record["question"],
            answer=record["answer"],
            is_active=bool(record.get("is_active", record.get("isActive", True))),
        )


# ============================================================================
# SEARCH
# ============================================================================


class SearchTier(Enum):
    """Which step of the search pipeline produced the products."""

    DIRECT = "direct"
    SMART = "smart"
    KEYWORD = "keyword"
    RANDOM = "random"
    NONE = "none"


@dataclass
class SearchResult:
    """
    Products and FAQ entries retrieved for one query.

    ``is_random_recommendation`` is set only when no search tier matched
    and the random sample was used instead.
    """

    products: list[Product] = field(default_factory=list)
    faqs: list[FaqEntry] = field(default_factory=list)
    tier: SearchTier = SearchTier.NONE
    is_random_recommendation: bool = False

    @property
    def has_products(self) -> bool:
        return len(self.products) > 0


# ============================================================================
# GENERATION
# ============================================================================


class FailureReason(Enum):
    """Why the generation endpoint did not produce text."""

    EXHAUSTED = "exhausted"
    PERMANENT = "permanent"
    CONFIGURATION = "configuration"


@dataclass(frozen=True)
class GenerationOutcome:
    """Either generated text or a typed failure, plus how many calls it took."""

    text: str | None = None
    failure: FailureReason | None = None
    attempts: int = 0
    status_code: int | None = None

    @property
    def succeeded(self) -> bool:
        return self.failure is None and self.text is not None

    @property
    def label(self) -> str:
        """``success`` or the failure reason, for logs and metrics."""
        if self.succeeded:
            return "success"
        return (self.failure or FailureReason.PERMANENT).value

    @classmethod
    def success(cls, text: str, attempts: int) -> GenerationOutcome:
        return cls(text=text, attempts=attempts)

    @classmethod
    def failed(
        cls,
        reason: FailureReason,
        attempts: int,
        status_code: int | None = None,
    ) -> GenerationOutcome:
        return cls(failure=reason, attempts=attempts, status_code=status_code)


# ============================================================================
# RESPONSE
# ============================================================================


@dataclass(frozen=True)
class ChatResponse:
    """
    The assistant's answer, always well-formed.

    ``has_products`` is derived from ``products`` so it can never disagree
    with the list it describes.
    """

    text: str
    products: tuple[Product, ...] = ()

    @property
    def has_products(self) -> bool:
        return len(self.products) > 0

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "products": [p.to_summary() for p in self.products],
            "hasProducts": self.has_products,
        }
