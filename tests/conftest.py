"""Shared fixtures for the listing scraper tests."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Union

import pytest

from listing_scraper.scraper.core.services import (
    CrawlItem,
    CrawlResponse,
    CrawlService,
    ScrapeResponse,
)

LISTING_HTML = """
<html><body>
<h1>
    Rolex Submariner Date
    126610LN
</h1>
<table><tbody>
  <tr><td><strong>Listing code</strong></td><td>ABC123</td></tr>
  <tr><td><strong>Brand</strong></td><td>Rolex</td></tr>
  <tr><td><strong>Model</strong></td><td>Submariner   Date</td></tr>
  <tr><td><strong>Movement</strong></td><td>Automatic</td></tr>
  <tr><td><strong>Price</strong></td><td>$14,500 <small>(= 13,200 EUR)</small></td></tr>
</tbody></table>
<table><tbody>
  <tr><td colspan="2"><h3>Caliber</h3></td></tr>
  <tr><td><strong>Movement</strong></td><td>Automatic</td></tr>
  <tr><td><strong>Caliber/movement</strong></td><td>3235</td></tr>
  <tr><td><strong>Power reserve</strong></td><td>70 h</td></tr>
</tbody></table>
<table><tbody>
  <tr><td colspan="2"><h3>Case</h3></td></tr>
  <tr><td><strong>Case material</strong></td><td>Steel</td></tr>
  <tr><td><strong>Case diameter</strong></td><td>41 mm (48 mm lug-to-lug)</td></tr>
  <tr><td><strong>Water resistance</strong></td><td>30 ATM</td></tr>
  <tr><td><strong>Dial</strong></td><td>Black</td></tr>
</tbody></table>
<table><tbody>
  <tr><td colspan="2"><h3>Bracelet/strap</h3></td></tr>
  <tr><td><strong>Bracelet material</strong></td><td>Steel</td></tr>
  <tr><td><strong>Clasp</strong></td><td>Fold clasp</td></tr>
</tbody></table>
</body></html>
"""


class StubCrawlService(CrawlService):
    """Stand-in for the external crawl/fetch services."""

    def __init__(
        self,
        discover_response: Optional[CrawlResponse] = None,
        pages: Optional[Dict[str, Union[ScrapeResponse, Exception]]] = None,
        discover_error: Optional[Exception] = None,
    ) -> None:
        self.discover_response = discover_response or CrawlResponse(success=True)
        self.discover_error = discover_error
        self.pages = pages or {}
        self.discover_calls: List[dict] = []
        self.fetch_calls: List[dict] = []

    def discover(
        self, seed_url: str, result_limit: int, formats: Sequence[str] = ("links",)
    ) -> CrawlResponse:
        self.discover_calls.append(
            {"seed_url": seed_url, "result_limit": result_limit, "formats": list(formats)}
        )
        if self.discover_error is not None:
            raise self.discover_error
        return self.discover_response

    def fetch(
        self,
        url: str,
        formats: Sequence[str] = ("html",),
        include_tags: Sequence[str] = (),
    ) -> ScrapeResponse:
        self.fetch_calls.append(
            {"url": url, "formats": list(formats), "include_tags": list(include_tags)}
        )
        page = self.pages.get(url, ScrapeResponse(success=True, html=LISTING_HTML))
        if isinstance(page, Exception):
            raise page
        return page


def discovered(*links: str) -> CrawlResponse:
    """Build a successful discovery response holding ``links``."""
    return CrawlResponse(success=True, data=[CrawlItem(url="https://dealer.example/", links=list(links))])


@pytest.fixture()
def listing_html() -> str:
    return LISTING_HTML
