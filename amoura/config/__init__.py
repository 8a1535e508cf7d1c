"""
Amoura configuration module.

Central configuration for the shopping assistant.
Loads settings from environment variables with sensible defaults, then
freezes them into an immutable ``Settings`` value that services receive
at construction time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_CATALOG_PATH = DATA_DIR / "catalog.json"


# ---------------------------------------------------------------------------
# Generation Endpoint (Gemini REST API)
# ---------------------------------------------------------------------------

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_BASE_URL = os.getenv(
    "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
)
GENERATION_TIMEOUT = float(os.getenv("GENERATION_TIMEOUT", "30.0"))  # seconds


# ---------------------------------------------------------------------------
# Retry Policy
# ---------------------------------------------------------------------------

GENERATION_MAX_ATTEMPTS = int(os.getenv("GENERATION_MAX_ATTEMPTS", "5"))
GENERATION_BACKOFF_BASE = float(os.getenv("GENERATION_BACKOFF_BASE", "2.0"))

# Statuses the endpoint uses for "busy, try again later"
TRANSIENT_STATUS_CODES = frozenset({429, 503})


# ---------------------------------------------------------------------------
# Catalog Limits
# ---------------------------------------------------------------------------

PRODUCT_SEARCH_LIMIT = 3
FAQ_SEARCH_LIMIT = 2
RANDOM_SAMPLE_SIZE = int(os.getenv("RANDOM_SAMPLE_SIZE", "3"))


# ---------------------------------------------------------------------------
# Immutable settings values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded exponential backoff for transient generation failures.

    ``max_attempts`` counts every call, including the first one. The wait
    before attempt ``n + 1`` is ``backoff_base * 2 ** (n - 1)``.
    """

    max_attempts: int = GENERATION_MAX_ATTEMPTS
    backoff_base: float = GENERATION_BACKOFF_BASE

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.backoff_base < 0:
            raise ValueError(f"backoff_base must be >= 0, got {self.backoff_base}")

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after failed attempt ``attempt`` (1-indexed)."""
        return self.backoff_base * (2 ** (attempt - 1))


@dataclass(frozen=True)
class Settings:
    """Everything a chat request needs, fixed when the service is built."""

    gemini_api_key: str | None = None
    gemini_model: str = GEMINI_MODEL
    gemini_base_url: str = GEMINI_BASE_URL
    request_timeout: float = GENERATION_TIMEOUT
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    product_limit: int = PRODUCT_SEARCH_LIMIT
    faq_limit: int = FAQ_SEARCH_LIMIT
    random_sample_size: int = RANDOM_SAMPLE_SIZE
    catalog_path: Path = DEFAULT_CATALOG_PATH

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from the environment (read once, at startup)."""
        return cls(
            gemini_api_key=GEMINI_API_KEY,
            catalog_path=Path(os.getenv("CATALOG_PATH", str(DEFAULT_CATALOG_PATH))),
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self.gemini_api_key and self.gemini_api_key.strip())


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

from amoura.config.logging import (  # noqa: E402
    get_logger,
    configure_logging,
    log_banner,
    log_section,
    LOG_LEVEL,
    LOG_FORMAT,
)


# ---------------------------------------------------------------------------
# All exports
# ---------------------------------------------------------------------------

__all__ = [
    # Paths
    "PROJECT_ROOT",
    "DATA_DIR",
    "DEFAULT_CATALOG_PATH",
    # Generation
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "GEMINI_BASE_URL",
    "GENERATION_TIMEOUT",
    # Retry
    "GENERATION_MAX_ATTEMPTS",
    "GENERATION_BACKOFF_BASE",
    "TRANSIENT_STATUS_CODES",
    # Catalog
    "PRODUCT_SEARCH_LIMIT",
    "FAQ_SEARCH_LIMIT",
    "RANDOM_SAMPLE_SIZE",
    # Settings values
    "RetryPolicy",
    "Settings",
    # Logging
    "get_logger",
    "configure_logging",
    "log_banner",
    "log_section",
    "LOG_LEVEL",
    "LOG_FORMAT",
]
