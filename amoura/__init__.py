"""
Amoura: grounded shopping assistant for the de.amoura hijab catalog.

Answers customer questions from catalog facts only: a tiered catalog
search picks the products, the prompt confines the model to them, and the
Gemini call retries through transient overloads.

Architecture:
    amoura.core       - Pure domain logic (models, normalization, context, prompts)
    amoura.adapters   - External service wrappers (Gemini endpoint, catalog store)
    amoura.services   - Orchestration layer (search pipeline, chat service)
    amoura.config     - Configuration settings and logging
    amoura.api        - FastAPI application
"""

__version__ = "0.1.0"

# Expose key public API for convenience imports
from amoura.core import (
    # Models
    ChatResponse,
    FaqEntry,
    GenerationOutcome,
    Product,
    SearchResult,
    # Functions
    build_chat_prompt,
    normalize_query,
)

from amoura.services import (
    ChatService,
    SearchPipeline,
    generate_response,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "ChatResponse",
    "FaqEntry",
    "GenerationOutcome",
    "Product",
    "SearchResult",
    # Core functions
    "build_chat_prompt",
    "normalize_query",
    # Services
    "ChatService",
    "SearchPipeline",
    "generate_response",
]
