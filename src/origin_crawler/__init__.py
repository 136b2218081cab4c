"""
Same-origin web crawler that performs bounded BFS traversal from a seed URL,
retrying transient server errors, and reports the pages that answered 200.
"""
from origin_crawler.core import crawl, CrawlStats, UrlRecord, UrlStatus
from origin_crawler.links import extract_links

__version__ = "1.0.0"
__all__ = ["crawl", "extract_links", "CrawlStats", "UrlRecord", "UrlStatus"]
