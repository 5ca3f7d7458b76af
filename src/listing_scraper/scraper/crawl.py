"""
Crawl-and-scrape orchestration.

Expands a seed URL into candidate listing pages, then fetches and extracts
each one independently. A failing page is skipped; only discovery failures
and an empty candidate set abort the run.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional

from ..extraction.assembler import assemble_record
from .config import CrawlConfig
from .core.models import CrawlBatch, FetchOutcome
from .core.services import CrawlService
from .discovery.links import select_candidate_urls

logger = logging.getLogger(__name__)

BatchSink = Callable[[CrawlBatch], None]


class CrawlError(RuntimeError):
    """Raised when a crawl run cannot produce a batch."""


class CrawlState(Enum):
    SEEDING = "seeding"
    FILTERING = "filtering"
    FETCHING = "fetching"
    AGGREGATING = "aggregating"
    DONE = "done"
    FAILED = "failed"


class CrawlOrchestrator:
    """Drives discovery, per-URL scraping and batch aggregation."""

    def __init__(
        self,
        service: CrawlService,
        config: Optional[CrawlConfig] = None,
        sink: Optional[BatchSink] = None,
    ):
        """Initialize orchestrator with a crawl service and configuration."""
        self.service = service
        self.config = config or CrawlConfig()
        self.sink = sink
        self.state = CrawlState.SEEDING

    def run(self) -> CrawlBatch:
        """
        Execute one crawl run.

        Returns:
            CrawlBatch with the successfully extracted records, in candidate order

        Raises:
            CrawlError: If discovery fails or no candidate URLs remain
        """
        self._transition(CrawlState.SEEDING)
        batch = CrawlBatch()
        urls = self.discover_candidates()

        self._transition(CrawlState.FETCHING)
        outcomes: List[FetchOutcome] = []
        for idx, url in enumerate(urls, 1):
            logger.info(f"[{idx}/{len(urls)}] Scraping {url}")
            outcomes.append(self.scrape_url(url))

        self._transition(CrawlState.AGGREGATING)
        self.aggregate(batch, outcomes)
        if self.sink is not None:
            self.sink(batch)

        self._transition(CrawlState.DONE)
        self._print_summary(batch)
        return batch

    def discover_candidates(self) -> List[str]:
        """Run discovery and return the filtered, capped candidate list."""
        logger.info(f"Crawling seed URL {self.config.seed_url}")
        try:
            response = self.service.discover(
                self.config.seed_url,
                result_limit=self.config.result_limit,
                formats=list(self.config.formats),
            )
        except Exception as e:
            raise self._fail(f"Crawling failed: {e}") from e

        if not response.success:
            raise self._fail(f"Crawling failed: {response.error}")

        self._transition(CrawlState.FILTERING)
        urls = select_candidate_urls(
            response.data,
            exclude_markers=list(self.config.exclude_markers),
            max_urls=self.config.max_urls,
        )
        if not urls:
            raise self._fail("No valid links found after filtering.")

        for url in urls:
            logger.debug(f"  candidate: {url}")
        return urls

    def scrape_url(self, url: str) -> FetchOutcome:
        """Fetch and extract one page; failures become a skipped outcome."""
        try:
            response = self.service.fetch(
                url,
                formats=list(self.config.scrape_formats),
                include_tags=list(self.config.include_tags),
            )
            if not response.success:
                logger.error(f"Failed to scrape URL: {url} ({response.error})")
                return FetchOutcome(url=url, error_message=response.error or "fetch failed")

            record = assemble_record(response.html, url)
            return FetchOutcome(url=url, record=record)

        except Exception as e:
            logger.error(f"Error scraping {url}: {e}")
            return FetchOutcome(url=url, error_message=str(e))

    @staticmethod
    def aggregate(batch: CrawlBatch, outcomes: List[FetchOutcome]) -> CrawlBatch:
        """Append successful outcomes to the batch in the order given."""
        for outcome in outcomes:
            batch.attempted += 1
            if outcome.success:
                batch.append(outcome.record)
            else:
                batch.skip(outcome.url, outcome.error_message or "unknown error")
        return batch

    def _print_summary(self, batch: CrawlBatch) -> None:
        """Log the run totals and the reason each skipped URL was dropped."""
        logger.info(
            f"Crawl complete in {batch.elapsed_seconds():.1f}s: "
            f"{len(batch)}/{batch.attempted} pages extracted, {batch.skipped} skipped"
        )
        for url, reason in batch.skip_reasons:
            logger.info(f"  skipped {url}: {reason}")

    def _transition(self, state: CrawlState) -> None:
        self.state = state
        logger.debug(f"Crawl state -> {state.value}")

    def _fail(self, message: str) -> CrawlError:
        self._transition(CrawlState.FAILED)
        logger.error(message)
        return CrawlError(message)
