"""
HTTP service exposing the crawler.

POST /crawl with ``{"url": "..."}`` runs one crawl and answers with the list
of pages that returned 200.
"""
from __future__ import annotations

import argparse
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from origin_crawler import __version__
from origin_crawler.core import PROCESSED_LIMIT, RETRY_LIMIT, crawl

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3030


class CrawlRequest(BaseModel):
    """Request to crawl from a seed URL"""

    url: Optional[str] = Field(
        default=None,
        description="Seed URL",
        examples=["https://example.com/"],
    )


def create_app(max_slots: int = PROCESSED_LIMIT, retry_limit: int = RETRY_LIMIT) -> FastAPI:
    """
    FastAPI application factory

    Every request runs its own crawl, so no crawl state is shared between
    concurrent requests.
    """
    app = FastAPI(
        title="origin-crawler",
        version=__version__,
        description="Bounded same-origin web crawler",
    )

    # Sync route: FastAPI runs it in its thread pool since fetches block.
    @app.post("/crawl")
    def crawl_from_seed(request: Optional[CrawlRequest] = None):
        if request is None or not request.url:
            return JSONResponse(status_code=400, content={"message": "Empty request"})

        try:
            urls = crawl(request.url, max_slots=max_slots, retry_limit=retry_limit)
        except Exception as e:
            logger.exception("Crawl from %s failed", request.url)
            return JSONResponse(status_code=500, content={"error": str(e)})

        logger.info("Crawl from %s returned %d urls", request.url, len(urls))
        return urls

    return app


def main() -> int:
    """Serve the crawler over HTTP."""
    parser = argparse.ArgumentParser(description="Serve the crawler at POST /crawl.")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"Port (default: {DEFAULT_PORT})")
    parser.add_argument("--max-slots", type=int, default=PROCESSED_LIMIT, help="Frontier slots per crawl")
    parser.add_argument("--retry-limit", type=int, default=RETRY_LIMIT, help="Retries for 5xx responses")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    app = create_app(max_slots=args.max_slots, retry_limit=args.retry_limit)
    logger.info("App listening on port %d", args.port)
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
