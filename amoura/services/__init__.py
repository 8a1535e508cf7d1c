"""
Amoura services layer.

Orchestration logic that coordinates between core domain logic and
adapters: the tiered catalog search and the chat response service.
"""

# Search service
from amoura.services.retrieval import (
    SearchPipeline,
    order_keywords,
    search_catalog,
)

# Chat service
from amoura.services.chat import (
    ChatService,
    generate_response,
)

__all__ = [
    # Search
    "SearchPipeline",
    "order_keywords",
    "search_catalog",
    # Chat
    "ChatService",
    "generate_response",
]
