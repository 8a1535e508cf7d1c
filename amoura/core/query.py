"""
Query normalization.

Turns a raw chat message into the search strings the retrieval pipeline
uses: a cleaned full-text query and a keyword list with conversational
filler removed. Pure functions, no failure modes.
"""

from __future__ import annotations

import re

from amoura.core.models import Query

# Greetings, politeness particles and connective words (Indonesian and
# English) that carry no catalog meaning.
STOP_WORDS = frozenset(
    {
        # greetings
        "halo", "hallo", "hai", "haii", "hello", "helo", "pagi", "siang",
        "sore", "malam", "assalamualaikum",
        # forms of address and politeness
        "kak", "kaka", "kakak", "sis", "min", "mimin", "admin", "tolong",
        "mohon", "please", "thanks", "makasih", "terima", "kasih",
        # particles
        "dong", "deh", "sih", "kok", "nih", "yah", "lah", "kah", "nya",
        # connectives and function words
        "yang", "dan", "atau", "dengan", "untuk", "buat", "dari", "ini",
        "itu", "ada", "apa", "apakah", "gimana", "bagaimana", "berapa",
        "mau", "ingin", "pengen", "cari", "carikan", "lagi", "juga",
        "saya", "aku", "kamu", "bisa", "boleh", "tidak", "gak", "nggak",
        "punya", "sama", "aja", "saja",
        "the", "and", "for", "with", "you", "any", "have", "want",
        "looking", "need", "some", "what", "how",
    }
)

MIN_KEYWORD_LENGTH = 3

_NON_WORD = re.compile(r"[^\w\s]", re.UNICODE)


def normalize_message(message: str) -> str:
    """Lowercase, replace punctuation with spaces, collapse whitespace."""
    if not message:
        return ""
    return " ".join(_NON_WORD.sub(" ", message.lower()).split())


def extract_keywords(normalized: str) -> list[str]:
    """
    Split a normalized message into search keywords.

    Drops stop words and tokens shorter than ``MIN_KEYWORD_LENGTH``;
    keeps the original order (duplicates included).
    """
    return [
        token
        for token in normalized.split()
        if len(token) >= MIN_KEYWORD_LENGTH and token not in STOP_WORDS
    ]


def normalize_query(message: str) -> Query:
    """
    Build a ``Query`` from a raw user message.

    Args:
        message: Raw chat text; ``None`` or empty yields an empty query.

    Returns:
        Query with normalized text and keyword tuple.
    """
    raw = message or ""
    normalized = normalize_message(raw)
    return Query(raw=raw, normalized=normalized, keywords=tuple(extract_keywords(normalized)))
