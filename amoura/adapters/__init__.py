"""
Amoura adapters layer.

External service wrappers that implement the interfaces expected by the
service layer: the Gemini generation endpoint and the catalog store.
"""

# Generation endpoint
from amoura.adapters.llm import (
    ConfigurationError,
    GeminiClient,
    GenerationClient,
    GenerationError,
    PermanentGenerationError,
    TransientGenerationError,
)

# Catalog
from amoura.adapters.catalog import (
    CatalogStore,
    CatalogUnavailableError,
    InMemoryCatalog,
)

__all__ = [
    # Generation
    "GenerationClient",
    "GeminiClient",
    "GenerationError",
    "ConfigurationError",
    "TransientGenerationError",
    "PermanentGenerationError",
    # Catalog
    "CatalogStore",
    "CatalogUnavailableError",
    "InMemoryCatalog",
]
