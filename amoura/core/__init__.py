"""
Amoura core domain layer.

Pure domain logic with no external service dependencies.
Contains models, query normalization, context rendering, prompts and
response assembly.
"""

# Models (all dataclasses)
from amoura.core.models import (
    # Catalog records
    FaqEntry,
    Product,
    parse_attribute_list,
    # Search
    Query,
    SearchResult,
    SearchTier,
    # Generation
    FailureReason,
    GenerationOutcome,
    # Response
    ChatResponse,
)

# Query normalization
from amoura.core.query import (
    STOP_WORDS,
    extract_keywords,
    normalize_message,
    normalize_query,
)

# Context rendering
from amoura.core.context import (
    NO_FAQ_DATA,
    NO_PRODUCT_DATA,
    format_price,
    render_faq_context,
    render_product,
    render_products_context,
)

# Prompts
from amoura.core.prompts import (
    GROUNDING_RULES,
    PERSONA_PROMPT,
    build_chat_prompt,
    build_state_note,
)

# Response assembly
from amoura.core.responses import (
    BUSY_APOLOGY,
    GENERIC_APOLOGY,
    apology_for,
    assemble_response,
    fallback_response,
)

__all__ = [
    # Models
    "FaqEntry",
    "Product",
    "parse_attribute_list",
    "Query",
    "SearchResult",
    "SearchTier",
    "FailureReason",
    "GenerationOutcome",
    "ChatResponse",
    # Query
    "STOP_WORDS",
    "extract_keywords",
    "normalize_message",
    "normalize_query",
    # Context
    "NO_FAQ_DATA",
    "NO_PRODUCT_DATA",
    "format_price",
    "render_faq_context",
    "render_product",
    "render_products_context",
    # Prompts
    "GROUNDING_RULES",
    "PERSONA_PROMPT",
    "build_chat_prompt",
    "build_state_note",
    # Responses
    "BUSY_APOLOGY",
    "GENERIC_APOLOGY",
    "apology_for",
    "assemble_response",
    "fallback_response",
]
