"""Browser lifecycle for headless page rendering.

The renderer never launches or closes the browser itself; hosts use
``launch_browser`` and hand the resulting instance to ``Renderer``.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from playwright.async_api import Browser, async_playwright
from playwright.async_api import Error as PlaywrightError

from render_proxy.config import Config
from render_proxy.logging import get_logger


class BrowserError(Exception):
    """Exception raised when the browser cannot be started."""

    def __init__(self, message: str) -> None:
        """Initialize BrowserError.

        Args:
            message: Error description.
        """
        self.message = message
        super().__init__(message)


@asynccontextmanager
async def launch_browser(config: Config) -> AsyncIterator[Browser]:
    """Launch a shared Chromium instance for the lifetime of the block.

    Usage:
        async with launch_browser(config) as browser:
            renderer = Renderer(browser, config)

    Args:
        config: Supplies the headless flag and extra Chromium switches.

    Yields:
        The running browser.

    Raises:
        BrowserError: If Playwright or Chromium fails to start.
    """
    log = get_logger()
    async with async_playwright() as p:
        try:
            browser = await p.chromium.launch(
                headless=config.headless, args=list(config.browser_args)
            )
        except PlaywrightError as e:
            raise BrowserError(str(e)) from e

        log.debug("Browser launched", version=browser.version)
        try:
            yield browser
        finally:
            await browser.close()
            log.debug("Browser closed")
