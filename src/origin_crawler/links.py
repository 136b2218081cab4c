"""
Pattern-based link discovery.

Anchor tags are found with a non-greedy match up to the first ``>`` and the
href is captured from between matching quotes. No DOM is built, so markup is
treated as plain untrusted text.
"""
from __future__ import annotations

import re
from typing import Dict, List

from origin_crawler.urls import resolve_url

LINK_PATTERN = re.compile(r"<a (.+?)>")
HREF_PATTERN = re.compile(r"href=([\"'])(.*?)\1")


def extract_hrefs(html: str) -> List[str]:
    """Return the raw href of every anchor tag, or "" where a tag has none."""
    hrefs = []
    for tag in LINK_PATTERN.finditer(html):
        href = HREF_PATTERN.search(tag.group(0))
        hrefs.append(href.group(2) if href else "")
    return hrefs


def extract_links(html: str, base_url: str) -> List[str]:
    """
    Extract the normalized absolute URLs linked from a page.

    Args:
        html: Page body.
        base_url: URL the page was fetched from, used to resolve relative
                  and protocol-relative hrefs.

    Returns:
        Unique URLs (origin + path) in order of first occurrence. Empty
        hrefs and hrefs that cannot be resolved are dropped.
    """
    links: Dict[str, None] = {}
    for href in extract_hrefs(html):
        if not href:
            continue
        target = resolve_url(href, base_url)
        if target:
            links.setdefault(target)
    return list(links)
