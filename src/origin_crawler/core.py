"""
Core crawling logic and data structures.
"""
from __future__ import annotations

import sys
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

import requests

from origin_crawler.links import extract_links
from origin_crawler.urls import can_parse, have_same_origin

HTTP_OK = 200
HTTP_INTERNAL_SERVER_ERROR = 500

# Frontier slots examined per crawl. Retries and discoveries grow the
# frontier but never raise this bound.
PROCESSED_LIMIT = 25

# Extra attempts granted to a URL answering with a 5xx status
RETRY_LIMIT = 2

DEFAULT_USER_AGENT = "OriginCrawler/1.0"


class UrlStatus(Enum):
    """Fetch outcome recorded for a URL in the visited table."""
    NOT_ASKED = "not_asked"
    OK = "ok"
    SERVER_ERROR = "server_error"


@dataclass(slots=True)
class UrlRecord:
    """Visited-table entry for a single URL."""
    status: UrlStatus = UrlStatus.NOT_ASKED
    retry_count: int = 0


@dataclass(slots=True)
class CrawlStats:
    """Statistics collected during crawl for summary output."""
    slots_inspected: int = 0
    fetches: int = 0
    retries: int = 0
    invalid_skipped: int = 0
    links_enqueued: int = 0
    cross_origin_skipped: int = 0
    status_counts: Dict[str, int] = field(default_factory=lambda: defaultdict(int))

    def record_status(self, status_code: int) -> None:
        """Record a non-200 response by status code."""
        if status_code != HTTP_OK:
            self.status_counts[str(status_code)] += 1


def print_progress(
    inspected: int,
    max_slots: int,
    discovered: int,
    queue_size: int,
) -> None:
    """Print real-time progress to stderr."""
    progress = f"\r\033[K[{inspected}/{max_slots}] Discovered: {discovered} | Queue: {queue_size}"
    sys.stderr.write(progress)
    sys.stderr.flush()


def print_scan_line(url: str, status: int, new_links: int, retrying: bool) -> None:
    """Print single scan result line."""
    marker = "↻ RETRY" if retrying else f"→ {status}"
    sys.stderr.write(f"\n  {marker} {url} (+{new_links} links)")
    sys.stderr.flush()


def classify(status_code: int, record: UrlRecord, retry_limit: int) -> bool:
    """
    Apply a response status to a visited record.

    Returns True when the URL should go back on the frontier for another
    attempt. 4xx responses and 5xx responses past the retry budget leave
    the record untouched, which keeps the URL out of the results.
    """
    if status_code == HTTP_OK:
        record.status = UrlStatus.OK
        return False

    if status_code >= HTTP_INTERNAL_SERVER_ERROR and record.retry_count < retry_limit:
        record.status = UrlStatus.SERVER_ERROR
        record.retry_count += 1
        return True

    return False


def crawl(
    seed_url: str,
    max_slots: int = PROCESSED_LIMIT,
    retry_limit: int = RETRY_LIMIT,
    session: Optional[requests.Session] = None,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout_s: Optional[float] = None,
    verbose: bool = False,
    stats: Optional[CrawlStats] = None,
) -> List[str]:
    """
    Crawl same-origin links breadth-first starting from a seed URL.

    Args:
        seed_url: The URL to start crawling from. It is queued as given;
                  an unparseable seed yields an empty result.
        max_slots: Maximum number of frontier slots to examine.
        retry_limit: Extra attempts for URLs answering with a 5xx status.
        session: HTTP session to fetch with. A new one is opened (and
                 closed) for the crawl when omitted.
        user_agent: User-Agent header for a session opened here.
        timeout_s: HTTP request timeout in seconds, None to wait forever.
        verbose: Whether to print progress information.
        stats: Optional statistics object filled in during the crawl.

    Returns:
        URLs that answered 200, in discovery order.

    Raises:
        requests.RequestException: A fetch failed at the transport level.
            The crawl is aborted and no partial result is returned.
    """
    if stats is None:
        stats = CrawlStats()

    owns_session = session is None
    if owns_session:
        session = requests.Session()
        session.headers["User-Agent"] = user_agent

    # Crawl state
    frontier: List[str] = [seed_url]
    visited: Dict[str, UrlRecord] = {seed_url: UrlRecord()}

    if verbose:
        sys.stderr.write(f"Starting crawl from: {seed_url}\n")
        sys.stderr.write(f"Max slots: {max_slots}, retry limit: {retry_limit}\n")

    try:
        i = 0
        # The frontier grows inside the loop, so its length is re-read on
        # every pass.
        while i < min(len(frontier), max_slots):
            url = frontier[i]
            i += 1
            stats.slots_inspected += 1

            if not can_parse(url):
                stats.invalid_skipped += 1
                if verbose:
                    sys.stderr.write(f"\n  ⊘ INVALID {url}")
                continue

            if verbose:
                print_progress(i, max_slots, len(visited), len(frontier) - i)

            resp = session.get(url, timeout=timeout_s)
            stats.fetches += 1
            stats.record_status(resp.status_code)

            retrying = classify(resp.status_code, visited[url], retry_limit)
            if retrying:
                frontier.append(url)
                stats.retries += 1

            # Links are followed whatever the status was.
            new_links_count = 0
            for target in extract_links(resp.text, url):
                if target in visited:
                    continue
                if not have_same_origin(target, seed_url):
                    stats.cross_origin_skipped += 1
                    continue

                frontier.append(target)
                visited[target] = UrlRecord()
                new_links_count += 1

            stats.links_enqueued += new_links_count
            if verbose:
                print_scan_line(url, resp.status_code, new_links_count, retrying)
    finally:
        if owns_session:
            session.close()

    if verbose:
        sys.stderr.write("\n\n")

    return [u for u, record in visited.items() if record.status is UrlStatus.OK]
