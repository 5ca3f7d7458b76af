"""
External crawl and page-fetch services.

The crawl orchestrator talks to these through the CrawlService interface so
that the browser-backed implementation can be swapped for a stub in tests.
"""

import logging
import random
import time
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set, Tuple
from urllib.parse import urldefrag, urljoin, urlparse

from bs4 import BeautifulSoup
from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.support.ui import WebDriverWait

from ...extraction.document import PARSER, narrow_html
from ..config import BrowserConfig
from .browser_factory import BrowserFactory, CloudflareHandler

logger = logging.getLogger(__name__)


@dataclass
class CrawlItem:
    """One crawled page and the links found on it."""
    url: Optional[str] = None
    links: Optional[List[str]] = None


@dataclass
class CrawlResponse:
    """Result of a discovery crawl."""
    success: bool
    data: List[CrawlItem] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class ScrapeResponse:
    """Result of fetching a single page."""
    success: bool
    html: Optional[str] = None
    error: Optional[str] = None


class CrawlService(ABC):
    """Abstract interface for URL discovery and page fetching."""

    @abstractmethod
    def discover(
        self, seed_url: str, result_limit: int, formats: Sequence[str] = ("links",)
    ) -> CrawlResponse:
        """Crawl from ``seed_url`` and report the links found."""

    @abstractmethod
    def fetch(
        self,
        url: str,
        formats: Sequence[str] = ("html",),
        include_tags: Sequence[str] = (),
    ) -> ScrapeResponse:
        """Fetch the HTML of one page, narrowed to ``include_tags`` when given."""


class BrowserCrawlService(CrawlService):
    """CrawlService backed by a Selenium Chrome driver."""

    def __init__(self, config: Optional[BrowserConfig] = None):
        """Initialize service with browser configuration."""
        self.config = config or BrowserConfig()
        self.delay_range: Tuple[float, float] = tuple(self.config.delay_range)

    def discover(
        self, seed_url: str, result_limit: int, formats: Sequence[str] = ("links",)
    ) -> CrawlResponse:
        """
        Breadth-first crawl of same-host pages starting at ``seed_url``.

        Args:
            seed_url: Page to start from
            result_limit: Maximum number of pages to visit
            formats: Requested formats; only "links" is produced

        Returns:
            CrawlResponse with one CrawlItem per visited page
        """
        if "links" not in formats:
            return CrawlResponse(success=False, error="Only the 'links' format is supported")

        host = urlparse(seed_url).netloc
        queue = deque([seed_url])
        seen: Set[str] = {seed_url}
        items: List[CrawlItem] = []

        driver = None
        try:
            driver = self._create_driver("discovery")

            while queue and len(items) < max(result_limit, 1):
                page_url = queue.popleft()
                if items:
                    self._random_delay()

                try:
                    page_source = self._load_page(driver, page_url)
                except WebDriverException as e:
                    if not items:
                        raise
                    logger.warning(f"Skipping {page_url} during discovery: {e}")
                    continue

                if page_source is None:
                    if not items:
                        return CrawlResponse(
                            success=False, error=f"Could not load seed page {seed_url}"
                        )
                    continue

                links = self._extract_links(page_source, page_url)
                items.append(CrawlItem(url=page_url, links=links))
                logger.info(f"Discovered {len(links)} links on {page_url}")

                for link in links:
                    if link not in seen and urlparse(link).netloc == host:
                        seen.add(link)
                        queue.append(link)

        except WebDriverException as e:
            logger.error(f"Discovery crawl failed: {e}")
            return CrawlResponse(success=False, data=items, error=str(e))

        finally:
            self._quit(driver)

        return CrawlResponse(success=True, data=items)

    def fetch(
        self,
        url: str,
        formats: Sequence[str] = ("html",),
        include_tags: Sequence[str] = (),
    ) -> ScrapeResponse:
        """Load ``url`` in a fresh browser and return its (narrowed) HTML."""
        if "html" not in formats:
            return ScrapeResponse(success=False, error="Only the 'html' format is supported")

        driver = None
        try:
            driver = self._create_driver("scraping")
            page_source = self._load_page(driver, url)
            if page_source is None:
                return ScrapeResponse(success=False, error=f"Failed to load {url}")

            html = narrow_html(page_source, include_tags) if include_tags else page_source
            return ScrapeResponse(success=True, html=html)

        except WebDriverException as e:
            return ScrapeResponse(success=False, error=str(e))

        finally:
            self._quit(driver)

    def _create_driver(self, driver_type: str) -> webdriver.Chrome:
        return BrowserFactory.create_driver(
            driver_type,
            headless=self.config.headless,
            page_load_timeout=self.config.page_load_timeout,
        )

    def _load_page(self, driver: webdriver.Chrome, url: str) -> Optional[str]:
        """Navigate to URL with Cloudflare handling; return the page source."""
        try:
            driver.get(url)
        except TimeoutException:
            logger.warning(f"Page load timeout for {url}; continuing with available DOM")

        try:
            WebDriverWait(driver, self.config.page_load_timeout).until(
                lambda d: d.execute_script("return document.readyState")
                in {"interactive", "complete"}
            )
        except TimeoutException:
            logger.debug("Ready state wait timed out; attempting to proceed")

        if CloudflareHandler.check_challenge(driver):
            if not CloudflareHandler.wait_for_challenge(
                driver, max_wait=self.config.cloudflare_wait
            ):
                return None

        return driver.page_source

    @staticmethod
    def _extract_links(page_source: str, base_url: str) -> List[str]:
        """Collect absolute http(s) links in document order."""
        soup = BeautifulSoup(page_source, PARSER)
        links: List[str] = []
        for anchor in soup.find_all("a", href=True):
            absolute, _ = urldefrag(urljoin(base_url, anchor["href"]))
            if urlparse(absolute).scheme in ("http", "https"):
                links.append(absolute)
        return links

    def _random_delay(self) -> None:
        """Add random delay between requests."""
        delay = random.uniform(*self.delay_range)
        logger.debug(f"Waiting {delay:.1f}s...")
        time.sleep(delay)

    @staticmethod
    def _quit(driver: Optional[webdriver.Chrome]) -> None:
        if driver is None:
            return
        try:
            driver.quit()
        except WebDriverException:
            logger.debug("Driver quit failed", exc_info=True)
