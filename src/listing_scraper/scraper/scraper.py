"""
Main entry point for the watch listing scraper.
Runs either a crawl-and-batch pass or a single-page extraction.

Usage:
    python -m listing_scraper.scraper.scraper
    python -m listing_scraper.scraper.scraper crawl.seed_url=https://dealer.example/ crawl.max_urls=5
    python -m listing_scraper.scraper.scraper pipeline.mode=single single.url=https://dealer.example/watch/1
"""

import logging
from typing import Any, Dict, Optional

import hydra
from omegaconf import DictConfig

from ..extraction.assembler import assemble_record
from ..utils.io import write_json_file, write_records_csv
from ..utils.logging_config import configure_logging
from .config import ScraperConfig, load_config
from .core.models import CrawlBatch
from .core.services import BrowserCrawlService, CrawlService
from .crawl import CrawlError, CrawlOrchestrator
from .validator import RecordValidator

logger = logging.getLogger(__name__)


class ListingScrapingPipeline:
    """Orchestrates the listing scraping run."""

    def __init__(self, config: ScraperConfig, service: Optional[CrawlService] = None):
        """Initialize pipeline with configuration and an optional crawl service."""
        self.config = config
        self.service = service or BrowserCrawlService(config.browser)

    def run(self) -> Any:
        """Execute the run mode selected in configuration."""
        logger.info("WATCH LISTING SCRAPER STARTED")
        logger.info("=" * 60)
        self._print_configuration()

        mode = self.config.pipeline.mode
        if mode == "crawl":
            return self.run_crawl()
        if mode == "single":
            return self.run_single()
        raise ValueError(f"Unknown pipeline mode: {mode}")

    def run_crawl(self) -> CrawlBatch:
        """Crawl the seed URL, scrape the candidates and save the batch."""
        orchestrator = CrawlOrchestrator(
            self.service, self.config.crawl, sink=self._save_batch
        )
        try:
            batch = orchestrator.run()
        except CrawlError as e:
            logger.error(f"Error during crawling and scraping: {e}")
            raise

        if self.config.pipeline.run_validation:
            RecordValidator(self.config.validation.min_fill_ratio).validate_all(batch.records)

        return batch

    def run_single(self) -> Optional[Dict[str, Any]]:
        """Scrape the configured page and save its record without url/name/type."""
        url = self.config.single.url
        logger.info(f"Scraping single page {url}")

        response = self.service.fetch(
            url,
            formats=list(self.config.crawl.scrape_formats),
            include_tags=list(self.config.crawl.include_tags),
        )
        if not response.success:
            logger.error(f"Failed to scrape URL: {url} ({response.error})")
            return None

        record = assemble_record(response.html, url)
        data = record.to_dict(include_identity=False)

        write_json_file(data, self.config.output.single_file, indent=self.config.output.indent)
        logger.info(f"Data saved to {self.config.output.single_file}")

        if self.config.pipeline.run_validation:
            RecordValidator(self.config.validation.min_fill_ratio).validate_all([record])

        return data

    def _save_batch(self, batch: CrawlBatch) -> None:
        output = self.config.output
        write_json_file(batch.to_list(), output.file, indent=output.indent)
        logger.info(f"Saved {len(batch)} records to {output.file}")

        if output.csv_file:
            if write_records_csv(batch.to_list(), output.csv_file):
                logger.info(f"Saved flattened CSV to {output.csv_file}")

    def _print_configuration(self) -> None:
        """Print pipeline configuration."""
        logger.info("Pipeline Configuration:")
        logger.info(f"  Mode: {self.config.pipeline.mode}")
        if self.config.pipeline.mode == "crawl":
            logger.info(f"  Seed URL: {self.config.crawl.seed_url}")
            logger.info(f"  Max URLs: {self.config.crawl.max_urls}")
            logger.info(f"  Output: {self.config.output.file}")
        else:
            logger.info(f"  URL: {self.config.single.url}")
            logger.info(f"  Output: {self.config.output.single_file}")
        logger.info(f"  Validation: {'ON' if self.config.pipeline.run_validation else 'OFF'}")


@hydra.main(version_base=None, config_path="../conf", config_name="scraping")
def main(cfg: DictConfig) -> None:
    """
    Main entry point for the listing scraper.

    Args:
        cfg: Hydra configuration object
    """
    config = load_config(cfg)
    configure_logging(config.logging.level, config.logging.format)

    pipeline = ListingScrapingPipeline(config)
    try:
        pipeline.run()
    except KeyboardInterrupt:
        logger.warning("Run interrupted by user")


if __name__ == "__main__":
    main()
