"""
Configuration schemas for the listing scraper using Hydra.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from omegaconf import DictConfig, OmegaConf


@dataclass
class PipelineConfig:
    """Which run mode to execute."""

    mode: str = "crawl"  # "crawl" or "single"
    run_validation: bool = True


@dataclass
class CrawlConfig:
    """Seed discovery and fan-out settings for crawl mode."""

    seed_url: str = "https://example.com/"
    result_limit: int = 1
    max_urls: int = 10
    exclude_markers: List[str] = field(
        default_factory=lambda: ["/search/", "/info/", "/about-us"]
    )
    formats: List[str] = field(default_factory=lambda: ["links"])
    scrape_formats: List[str] = field(default_factory=lambda: ["html"])
    include_tags: List[str] = field(default_factory=lambda: ["table", "h1"])


@dataclass
class SingleConfig:
    """Target page for single-page mode."""

    url: str = "https://example.com/"


@dataclass
class BrowserConfig:
    """Selenium browser settings."""

    headless: bool = True
    page_load_timeout: int = 20
    delay_range: List[float] = field(default_factory=lambda: [2.0, 5.0])
    cloudflare_wait: int = 60


@dataclass
class OutputConfig:
    """Where results are written."""

    file: str = "data/crawl_and_scrape_result.json"
    single_file: str = "data/watch_data.json"
    indent: int = 4
    csv_file: Optional[str] = None


@dataclass
class ValidationConfig:
    """Record completeness checks."""

    min_fill_ratio: float = 0.5


@dataclass
class LoggingConfig:
    """Logging setup."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class ScraperConfig:
    """Main configuration class for the listing scraper."""

    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    crawl: CrawlConfig = field(default_factory=CrawlConfig)
    single: SingleConfig = field(default_factory=SingleConfig)
    browser: BrowserConfig = field(default_factory=BrowserConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(cfg: Optional[DictConfig] = None) -> ScraperConfig:
    """
    Merge a Hydra/OmegaConf config onto the structured defaults.

    Unknown keys or wrongly typed values raise an OmegaConf validation error.
    """
    schema = OmegaConf.structured(ScraperConfig)
    if cfg is not None:
        schema = OmegaConf.merge(schema, cfg)
    return OmegaConf.to_object(schema)
