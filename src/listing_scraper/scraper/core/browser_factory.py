"""
Browser factory for creating configured Selenium drivers.
Implements factory pattern for browser creation.
"""

import logging
import random
import time

from selenium import webdriver
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.common.exceptions import WebDriverException
from webdriver_manager.chrome import ChromeDriverManager

logger = logging.getLogger(__name__)


class BrowserFactory:
    """Factory for creating browser instances with different configurations."""

    # Stealth JavaScript to avoid detection
    STEALTH_JS = """
    Object.defineProperty(navigator, 'webdriver', {get: () => undefined});
    Object.defineProperty(navigator, 'languages', {get: () => ['en-US', 'en']});
    Object.defineProperty(navigator, 'platform', {get: () => 'Linux x86_64'});
    window.chrome = {runtime: {}};
    """

    USER_AGENT = (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
    )

    @staticmethod
    def create_driver(
        driver_type: str = "standard",
        headless: bool = True,
        page_load_timeout: int = 20,
    ) -> webdriver.Chrome:
        """
        Create a browser driver based on type.

        Args:
            driver_type: Type of driver ("standard", "discovery", "scraping")
            headless: Run Chrome without a window
            page_load_timeout: Seconds before a page load is abandoned

        Returns:
            Configured Chrome driver
        """
        if driver_type in ("discovery", "scraping"):
            options = BrowserFactory._get_enhanced_options(headless)
        else:
            options = BrowserFactory._get_base_options(headless)

        driver = webdriver.Chrome(
            service=Service(ChromeDriverManager().install()),
            options=options,
        )

        if driver_type == "scraping":
            BrowserFactory._inject_stealth_script(driver)
        BrowserFactory._configure_driver(driver, page_load_timeout)
        return driver

    @staticmethod
    def _get_base_options(headless: bool) -> Options:
        """Get basic Chrome options."""
        options = Options()

        if headless:
            options.add_argument("--headless=new")

        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")
        options.add_argument("--window-size=1920,1080")
        options.page_load_strategy = "eager"

        return options

    @staticmethod
    def _get_enhanced_options(headless: bool) -> Options:
        """Get enhanced Chrome options with anti-detection features."""
        options = BrowserFactory._get_base_options(headless)

        options.add_argument("--disable-blink-features=AutomationControlled")
        options.add_experimental_option("excludeSwitches", ["enable-automation"])
        options.add_experimental_option("useAutomationExtension", False)
        options.add_argument(f"user-agent={BrowserFactory.USER_AGENT}")
        options.add_argument("--disable-gpu")

        options.add_experimental_option("prefs", {
            "profile.default_content_setting_values": {
                "notifications": 2,
                "geolocation": 2
            }
        })

        return options

    @staticmethod
    def _inject_stealth_script(driver: webdriver.Chrome) -> None:
        """Inject stealth JavaScript to avoid detection."""
        try:
            driver.execute_cdp_cmd(
                "Page.addScriptToEvaluateOnNewDocument",
                {"source": BrowserFactory.STEALTH_JS}
            )
        except WebDriverException as e:
            logger.debug(f"Failed to inject stealth script: {e}")

    @staticmethod
    def _configure_driver(driver: webdriver.Chrome, page_load_timeout: int) -> None:
        """Configure driver with timeouts and window size."""
        driver.set_page_load_timeout(page_load_timeout)
        driver.implicitly_wait(5)
        driver.set_window_size(1920, 1080)


class CloudflareHandler:
    """Handles Cloudflare challenges and detection."""

    CHALLENGE_INDICATORS = (
        "checking your browser",
        "just a moment",
        "cf-browser-verification",
        "verify you are human",
    )

    @staticmethod
    def check_challenge(driver: webdriver.Chrome) -> bool:
        """Check if page has Cloudflare challenge."""
        try:
            page_source = driver.page_source.lower()
            page_title = driver.title.lower()
        except WebDriverException as e:
            logger.error(f"Error checking Cloudflare: {e}")
            return False

        # Listing content already rendered
        if "<table" in page_source:
            return False

        for indicator in CloudflareHandler.CHALLENGE_INDICATORS:
            if indicator in page_source or indicator in page_title:
                logger.warning(f"Cloudflare challenge detected: '{indicator}'")
                return True

        return False

    @staticmethod
    def wait_for_challenge(driver: webdriver.Chrome, max_wait: int = 60) -> bool:
        """Wait for Cloudflare challenge to complete."""
        start_time = time.time()

        logger.info(f"Waiting for Cloudflare challenge (max {max_wait}s)...")

        while time.time() - start_time < max_wait:
            if not CloudflareHandler.check_challenge(driver):
                logger.info("Cloudflare challenge resolved")
                return True

            CloudflareHandler.simulate_human_behavior(driver)
            time.sleep(2)

        logger.warning("Cloudflare challenge timeout")
        return False

    @staticmethod
    def simulate_human_behavior(driver: webdriver.Chrome) -> None:
        """Simulate human-like behavior."""
        try:
            scroll = random.randint(100, 300)
            driver.execute_script(f"window.scrollBy(0, {scroll});")
            time.sleep(random.uniform(0.5, 1.0))
        except WebDriverException:
            logger.debug("Scroll simulation failed", exc_info=True)
