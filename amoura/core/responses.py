"""
Final response assembly.

Merges the generation outcome with the products the search pipeline
found. When generation failed, the text is an apology in the brand voice
(no technical detail); the products are returned either way so the
client can still show them.
"""

from amoura.core.models import (
    ChatResponse,
    FailureReason,
    GenerationOutcome,
    SearchResult,
)

# Endpoint busy for every attempt: ask the customer to try again shortly.
BUSY_APOLOGY = (
    "Maaf ya kak 🙏 asisten de.amoura lagi ramai banget nih. "
    "Coba tanya lagi sebentar lagi ya, atau lihat-lihat katalog kami dulu 💕"
)

# Permanent or configuration failure.
GENERIC_APOLOGY = (
    "Haii kak! Maaf ya lagi ada gangguan 🙏 "
    "Coba lagi nanti atau lihat katalog kami ya 💕"
)


def apology_for(reason: FailureReason | None) -> str:
    """Apology text for a failed generation outcome."""
    if reason is FailureReason.EXHAUSTED:
        return BUSY_APOLOGY
    return GENERIC_APOLOGY


def assemble_response(
    outcome: GenerationOutcome,
    result: SearchResult,
) -> ChatResponse:
    """
    Build the ChatResponse returned to the caller.

    Args:
        outcome: Result of the generation call.
        result: Search result whose products are always passed through.

    Returns:
        ChatResponse with generated text or an apology.
    """
    if outcome.succeeded:
        text = outcome.text.strip()
    else:
        text = apology_for(outcome.failure)
    return ChatResponse(text=text, products=tuple(result.products))


def fallback_response(result: SearchResult | None = None) -> ChatResponse:
    """Apology response used when the request failed before generation."""
    products = tuple(result.products) if result is not None else ()
    return ChatResponse(text=GENERIC_APOLOGY, products=products)
