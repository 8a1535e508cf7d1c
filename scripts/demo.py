"""
Demo script showing the complete search + grounded answer pipeline.

Outputs:
- Which search tier produced the products (or the random fallback)
- The products placed in the prompt
- The generated answer (or the apology, if generation failed)

Usage:
    python scripts/demo.py
    python scripts/demo.py --query "pashmina dusty pink"
    python scripts/demo.py --query "mobil" --json
"""

import argparse
import asyncio
import json

from amoura.adapters.catalog import InMemoryCatalog
from amoura.config import Settings, get_logger, log_banner, log_section
from amoura.core import normalize_query
from amoura.services.chat import ChatService

logger = get_logger(__name__)


async def demo_chat(query: str) -> dict:
    """
    Run one chat turn against the seed catalog and log each stage.

    Returns dict suitable for JSON serialization.
    """
    settings = Settings.from_env()
    catalog = InMemoryCatalog.from_json(settings.catalog_path, settings)
    service = ChatService(catalog, settings=settings)

    log_banner(logger, "AMOURA CHAT DEMO", width=70)
    logger.info('Message: "%s"', query)

    normalized = normalize_query(query)
    logger.info("Normalized: %s", normalized.normalized)
    logger.info("Keywords: %s", ", ".join(normalized.keywords) or "-")

    # The search tier itself is logged by the pipeline ("Search finished")
    response = await service.generate_response(query)

    log_section(logger, "PRODUCTS")
    for product in response.products:
        logger.info("- %s (%s)", product.name, product.category_name or "-")
    if not response.has_products:
        logger.info("No products")

    log_section(logger, "ANSWER")
    logger.info(response.text)

    return response.to_dict()


def main():
    parser = argparse.ArgumentParser(description="Demo chat pipeline")
    parser.add_argument(
        "--query",
        "-q",
        type=str,
        default="pashmina dusty pink",
        help="Customer message to answer",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON instead of formatted text",
    )
    args = parser.parse_args()

    result = asyncio.run(demo_chat(args.query))

    if args.json:
        log_section(logger, "JSON OUTPUT")
        print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
