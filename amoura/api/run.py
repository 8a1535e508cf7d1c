"""
Server entry point.

Usage:
    python -m amoura.api.run
    python -m amoura.api.run --port 8000

For auto-reload during development, use uvicorn directly:
    uvicorn amoura.api.app:create_app --factory --reload --port 8000
"""

from __future__ import annotations

import argparse
import os

import uvicorn

from amoura.api.app import create_app
from amoura.config import configure_logging


def main():
    parser = argparse.ArgumentParser(description="Amoura chat API server")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    parser.add_argument(
        "--port", type=int,
        default=int(os.getenv("PORT", "8000")),
        help="Port (defaults to PORT env var, then 8000)",
    )
    parser.add_argument("--workers", type=int, default=1, help="Worker processes")
    args = parser.parse_args()

    configure_logging()

    if args.workers > 1:
        uvicorn.run(
            "amoura.api.app:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            workers=args.workers,
            log_level="info",
        )
    else:
        uvicorn.run(create_app(), host=args.host, port=args.port, log_level="info")


if __name__ == "__main__":
    main()
