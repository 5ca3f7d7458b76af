"""
Candidate URL selection from discovery results.
"""

import logging
from typing import Iterable, List, Sequence

from ..core.services import CrawlItem

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_MARKERS = ("/search/", "/info/", "/about-us")
DEFAULT_MAX_URLS = 10


def flatten_links(items: Iterable[CrawlItem]) -> List[str]:
    """Concatenate the link lists of all crawl items, skipping missing ones."""
    urls: List[str] = []
    for item in items:
        urls.extend(item.links or [])
    return urls


def is_listing_url(url: str, exclude_markers: Sequence[str] = DEFAULT_EXCLUDE_MARKERS) -> bool:
    """A URL is a listing candidate unless it contains an excluded path marker."""
    return not any(marker in url for marker in exclude_markers)


def filter_listing_urls(
    urls: Iterable[str], exclude_markers: Sequence[str] = DEFAULT_EXCLUDE_MARKERS
) -> List[str]:
    """Drop known non-listing pages, keeping discovery order."""
    return [url for url in urls if is_listing_url(url, exclude_markers)]


def cap_urls(urls: Sequence[str], max_urls: int = DEFAULT_MAX_URLS) -> List[str]:
    """Keep at most ``max_urls`` URLs from the front of the list."""
    return list(urls[:max(max_urls, 0)])


def select_candidate_urls(
    items: Iterable[CrawlItem],
    exclude_markers: Sequence[str] = DEFAULT_EXCLUDE_MARKERS,
    max_urls: int = DEFAULT_MAX_URLS,
) -> List[str]:
    """
    Flatten, filter and cap discovered links.

    Args:
        items: Crawl items returned by discovery
        exclude_markers: Path fragments marking non-listing pages
        max_urls: Fan-out cap

    Returns:
        Ordered list of at most ``max_urls`` candidate URLs
    """
    all_urls = flatten_links(items)
    filtered = filter_listing_urls(all_urls, exclude_markers)
    capped = cap_urls(filtered, max_urls)

    logger.info(
        f"Candidate URLs: {len(all_urls)} discovered, "
        f"{len(filtered)} after filtering, {len(capped)} after cap"
    )
    return capped
