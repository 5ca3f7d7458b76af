"""Tests for the browser-backed crawl service, using a fake Chrome driver."""

from __future__ import annotations

from typing import Dict, List, Sequence

import pytest

from listing_scraper.scraper.config import BrowserConfig
from listing_scraper.scraper.core import services
from listing_scraper.scraper.core.services import BrowserCrawlService

SEED = "https://dealer.example/"

PAGES = {
    SEED: """
        <a href="/watch/1">one</a>
        <a href="https://dealer.example/watch/2#photos">two</a>
        <a href="mailto:sales@dealer.example">mail</a>
        <a href="https://other.example/watch/9">elsewhere</a>
    """,
    "https://dealer.example/watch/1": """
        <h1>Watch one</h1><p>blurb</p>
        <table><tr><td><strong>Brand</strong></td><td>Acme</td></tr></table>
        <a href="/watch/3">three</a>
    """,
}


class FakeDriver:
    """Minimal stand-in for selenium's Chrome driver."""

    def __init__(self, pages: Dict[str, str], unreachable: Sequence[str] = ()) -> None:
        self.pages = pages
        self.unreachable = set(unreachable)
        self.visited: List[str] = []
        self.page_source = ""
        self.title = ""
        self.quit_called = False

    def get(self, url: str) -> None:
        self.visited.append(url)
        if url in self.unreachable:
            raise services.WebDriverException("net::ERR_CONNECTION_RESET")
        self.page_source = self.pages.get(url, "<html></html>")

    def execute_script(self, script: str):
        return "complete"

    def quit(self) -> None:
        self.quit_called = True


@pytest.fixture()
def driver(monkeypatch) -> FakeDriver:
    fake = FakeDriver(PAGES)
    monkeypatch.setattr(
        services.BrowserFactory, "create_driver", staticmethod(lambda *args, **kwargs: fake)
    )
    return fake


@pytest.fixture()
def service() -> BrowserCrawlService:
    return BrowserCrawlService(BrowserConfig(delay_range=[0.0, 0.0]))


def test_discover_seed_only(service: BrowserCrawlService, driver: FakeDriver) -> None:
    response = service.discover(SEED, result_limit=1)

    assert response.success
    assert len(response.data) == 1
    assert response.data[0].links == [
        "https://dealer.example/watch/1",
        "https://dealer.example/watch/2",
        "https://other.example/watch/9",
    ]
    assert driver.quit_called


def test_discover_follows_same_host_links(service: BrowserCrawlService, driver: FakeDriver) -> None:
    response = service.discover(SEED, result_limit=2)

    assert [item.url for item in response.data] == [SEED, "https://dealer.example/watch/1"]
    assert "https://other.example/watch/9" not in driver.visited


def test_discover_requires_links_format(service: BrowserCrawlService) -> None:
    response = service.discover(SEED, result_limit=1, formats=["markdown"])

    assert not response.success


def test_fetch_narrows_to_included_tags(service: BrowserCrawlService, driver: FakeDriver) -> None:
    response = service.fetch(
        "https://dealer.example/watch/1", include_tags=["table", "h1"]
    )

    assert response.success
    assert "<h1>Watch one</h1>" in response.html
    assert "blurb" not in response.html
    assert "Acme" in response.html
    assert driver.quit_called


def test_fetch_reports_driver_errors(service: BrowserCrawlService, monkeypatch) -> None:
    def broken_driver(*args, **kwargs):
        raise services.WebDriverException("chrome crashed")

    monkeypatch.setattr(services.BrowserFactory, "create_driver", staticmethod(broken_driver))

    response = service.fetch("https://dealer.example/watch/1")

    assert not response.success
    assert "chrome crashed" in response.error


def test_discover_skips_unreachable_linked_page(service: BrowserCrawlService, monkeypatch) -> None:
    fake = FakeDriver(PAGES, unreachable=["https://dealer.example/watch/1"])
    monkeypatch.setattr(
        services.BrowserFactory, "create_driver", staticmethod(lambda *args, **kwargs: fake)
    )

    response = service.discover(SEED, result_limit=3)

    assert response.success
    assert [item.url for item in response.data] == [SEED, "https://dealer.example/watch/2"]
    assert "https://dealer.example/watch/1" in fake.visited
    assert fake.quit_called


def test_discover_fails_when_seed_is_unreachable(service: BrowserCrawlService, monkeypatch) -> None:
    fake = FakeDriver(PAGES, unreachable=[SEED])
    monkeypatch.setattr(
        services.BrowserFactory, "create_driver", staticmethod(lambda *args, **kwargs: fake)
    )

    response = service.discover(SEED, result_limit=3)

    assert not response.success
    assert response.data == []
    assert "ERR_CONNECTION_RESET" in response.error
    assert fake.quit_called
