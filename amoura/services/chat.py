"""
Chat response service.

Orchestrates one grounded answer:
normalize message -> tiered catalog search -> prompt -> generation
(with retry) -> response assembly.

``generate_response`` never raises for catalog or generation failures;
the caller always gets a well-formed ChatResponse.
"""

from __future__ import annotations

from amoura.adapters.catalog import CatalogStore
from amoura.adapters.llm import GeminiClient, GenerationClient
from amoura.api.metrics import observe_generation_duration, record_generation_outcome
from amoura.config import Settings, get_logger
from amoura.config.logging import preview
from amoura.core import (
    ChatResponse,
    assemble_response,
    build_chat_prompt,
    normalize_query,
)
from amoura.services.retrieval import SearchPipeline
from amoura.utils import timed_operation

logger = get_logger(__name__)


class ChatService:
    """
    Answer customer questions from catalog facts only.

    Built once with its settings and collaborators; holds no per-request
    state, so concurrent ``generate_response`` calls are independent.
    """

    def __init__(
        self,
        catalog: CatalogStore,
        client: GenerationClient | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize the service.

        Args:
            catalog: Catalog lookups used by the search tiers.
            client: Pre-configured generation client (optional).
            settings: Settings used to build a GeminiClient if no client given.
        """
        self.settings = settings or Settings.from_env()
        self.client = client or GeminiClient(self.settings)
        self.model = getattr(self.client, "model", "unknown")
        self.pipeline = SearchPipeline(catalog)

    async def generate_response(self, user_message: str) -> ChatResponse:
        """
        Generate a grounded answer for one customer message.

        Args:
            user_message: Raw chat text.

        Returns:
            ChatResponse with the answer (or an apology) and the products used.
        """
        logger.info("Chat request: %s", preview(user_message or ""))

        query = normalize_query(user_message)
        result = await self.pipeline.search(query)
        prompt = build_chat_prompt(user_message or "", result)

        with timed_operation("Generation", logger, observe_generation_duration):
            outcome = await self.client.generate(prompt)

        label = outcome.label
        record_generation_outcome(label)
        if not outcome.succeeded:
            logger.warning(
                "Answering with apology",
                extra={
                    "reason": label,
                    "attempts": outcome.attempts,
                    "status_code": outcome.status_code,
                },
            )

        return assemble_response(outcome, result)


async def generate_response(
    user_message: str,
    catalog: CatalogStore,
    settings: Settings | None = None,
) -> ChatResponse:
    """
    Convenience function for one-off answers (scripts, notebooks).

    Args:
        user_message: Raw chat text.
        catalog: Catalog store to search.
        settings: Optional settings; read from the environment when omitted.

    Returns:
        ChatResponse.
    """
    service = ChatService(catalog, settings=settings)
    return await service.generate_response(user_message)
