"""
Command-line interface for the crawler.
"""
from __future__ import annotations

import argparse
import json
import re
import sys
from datetime import datetime
from pathlib import Path
from typing import List

import requests

from origin_crawler.core import (
    DEFAULT_USER_AGENT,
    PROCESSED_LIMIT,
    RETRY_LIMIT,
    CrawlStats,
    crawl,
)
from origin_crawler.urls import origin_of

# Where results go when --out is not given
RESULTS_DIR = Path("crawls")


def print_summary(stats: CrawlStats, urls: List[str]) -> None:
    """Print crawl summary to stderr."""
    sys.stderr.write("=" * 50 + "\n")
    sys.stderr.write("CRAWL SUMMARY\n")
    sys.stderr.write("=" * 50 + "\n\n")

    sys.stderr.write(f"Slots inspected:        {stats.slots_inspected}\n")
    sys.stderr.write(f"Fetches:                {stats.fetches}\n")
    sys.stderr.write(f"Retries scheduled:      {stats.retries}\n")
    sys.stderr.write(f"Invalid URLs skipped:   {stats.invalid_skipped}\n")
    sys.stderr.write(f"Cross-origin links:     {stats.cross_origin_skipped}\n")
    sys.stderr.write(f"Pages OK:               {len(urls)}\n\n")

    if stats.status_counts:
        sys.stderr.write("Non-200 responses:\n")
        for status, count in sorted(stats.status_counts.items()):
            sys.stderr.write(f"  HTTP {status}: {count}\n")
    else:
        sys.stderr.write("No errors encountered.\n")

    sys.stderr.write("\n")


def result_file_path(seed_url: str, results_dir: Path = RESULTS_DIR) -> Path:
    """
    Pick the file a crawl's URL list is saved to when --out is not given.

    Files are named after the seed's origin and the crawl start time, e.g.
    ``crawls/a_com_8080_20240101_120000.json``, so crawls of different
    sites or ports never overwrite each other. The directory is created on
    demand.
    """
    origin = origin_of(seed_url)
    site = origin.split("://", 1)[1] if origin else "invalid_seed"
    site_safe = re.sub(r"[^A-Za-z0-9]+", "_", site).strip("_")
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    results_dir.mkdir(parents=True, exist_ok=True)
    return results_dir / f"{site_safe}_{timestamp}.json"


def main() -> int:
    """Main entry point for the crawler CLI."""
    parser = argparse.ArgumentParser(
        description="Crawl same-origin links from a seed URL and output the pages that answered 200."
    )
    parser.add_argument("seed_url", help="Seed URL (e.g. https://example.com/)")
    parser.add_argument(
        "--max-slots",
        type=int,
        default=PROCESSED_LIMIT,
        help=f"Maximum frontier slots to examine (default: {PROCESSED_LIMIT})",
    )
    parser.add_argument(
        "--retry-limit",
        type=int,
        default=RETRY_LIMIT,
        help=f"Retries for URLs answering 5xx (default: {RETRY_LIMIT})",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds (default: none)")
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header")
    parser.add_argument("--out", help="Output file path, or '-' for stdout (default: auto-generated in crawls/)")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON")
    parser.add_argument("--verbose", action="store_true", help="Show progress and summary")
    args = parser.parse_args()

    if not args.seed_url:
        parser.error("Empty request")

    stats = CrawlStats()
    try:
        urls = crawl(
            seed_url=args.seed_url,
            max_slots=args.max_slots,
            retry_limit=args.retry_limit,
            user_agent=args.user_agent,
            timeout_s=args.timeout,
            verbose=args.verbose,
            stats=stats,
        )
    except requests.RequestException as e:
        sys.stderr.write(f"Crawl aborted: {e}\n")
        return 1

    if args.verbose:
        print_summary(stats, urls)

    json_text = json.dumps(urls, ensure_ascii=False, indent=2 if args.pretty else None)

    if args.out == "-":
        print(json_text)
    else:
        output_path = Path(args.out) if args.out else result_file_path(args.seed_url)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json_text, encoding="utf-8")
        if args.verbose:
            sys.stderr.write(f"Results written to: {output_path}\n")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
