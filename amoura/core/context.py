"""
Context rendering for the generation prompt.

Turns retrieved catalog records into the fixed-format text blocks the
prompt embeds. The model may only talk about what appears here, so every
field is rendered explicitly and missing values show as "-" rather than
being left for the model to guess.

A product whose data cannot be rendered is replaced by a one-line marker;
the remaining products are still rendered.
"""

from __future__ import annotations

from typing import Any

from amoura.config import get_logger
from amoura.core.models import FaqEntry, Product

logger = get_logger(__name__)

NO_PRODUCT_DATA = "[NO PRODUCT DATA]"
NO_FAQ_DATA = "[NO FAQ DATA]"
PLACEHOLDER = "-"
INCOMPLETE_PRODUCT = "(data produk tidak lengkap)"

CURRENCY_PREFIX = "Rp"


def format_price(value: Any) -> str:
    """
    Format a price as Indonesian Rupiah: ``Rp 45.000``.

    Raises:
        ValueError: If the value is present but not numeric.
    """
    if value is None or value == "":
        return PLACEHOLDER
    if isinstance(value, bool):
        raise ValueError(f"Invalid price: {value!r}")
    amount = round(float(value))
    return f"{CURRENCY_PREFIX} {amount:,}".replace(",", ".")


def _text(value: Any) -> str:
    """Render an optional scalar, using the placeholder when absent."""
    if value is None:
        return PLACEHOLDER
    text = str(value).strip()
    return text or PLACEHOLDER


def _variant_label(item: Any) -> str | None:
    if isinstance(item, dict):
        name = item.get("name") or item.get("color") or item.get("value")
        if not name:
            return None
        stock = item.get("stock")
        return f"{name} (stok {stock})" if stock is not None else str(name)
    label = str(item).strip()
    return label or None


def summarize_variants(product: Product) -> str:
    """Comma-separated variants (with stock when known), else the colors."""
    items = product.variant_list or product.color_list
    labels = [label for label in map(_variant_label, items) if label]
    return ", ".join(labels) if labels else PLACEHOLDER


def summarize_materials(product: Product) -> str:
    labels = [str(m).strip() for m in product.material_list if str(m).strip()]
    return ", ".join(labels) if labels else PLACEHOLDER


def render_product(index: int, product: Product) -> str:
    """Render one product as a numbered, indented block."""
    featured = "Ya (best seller)" if product.is_featured is True else "Tidak"
    lines = [
        f"[{index}] Nama: {_text(product.name)}",
        f"    Kategori: {_text(product.category_name)}",
        f"    Harga: {format_price(product.price)}",
        f"    Stok: {_text(product.stock)}",
        f"    Unggulan: {featured}",
        f"    Warna/Varian: {summarize_variants(product)}",
        f"    Bahan: {summarize_materials(product)}",
        f"    Link: {_text(product.marketplace_url)}",
        f"    Deskripsi: {_text(product.description)}",
    ]
    return "\n".join(lines)


def render_products_context(products: list[Product]) -> str:
    """
    Render all products for the prompt.

    Args:
        products: Products from the search pipeline.

    Returns:
        One block per product, or ``NO_PRODUCT_DATA`` for an empty list.
    """
    if not products:
        return NO_PRODUCT_DATA

    blocks = []
    for index, product in enumerate(products, 1):
        try:
            blocks.append(render_product(index, product))
        except Exception:
            logger.warning(
                "Skipping malformed product data",
                extra={"product_id": getattr(product, "id", None)},
                exc_info=True,
            )
            blocks.append(f"[{index}] {INCOMPLETE_PRODUCT}")
    return "\n\n".join(blocks)


def render_faq_context(faqs: list[FaqEntry]) -> str:
    """Render FAQ entries as question/answer pairs, or ``NO_FAQ_DATA``."""
    if not faqs:
        return NO_FAQ_DATA
    return "\n\n".join(
        f"T: {_text(faq.question)}\nJ: {_text(faq.answer)}" for faq in faqs
    )
