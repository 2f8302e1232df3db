"""Isolated browsing sessions for a single render request."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from enum import Enum

from playwright.async_api import Browser, BrowserContext, Page, Response

from render_proxy.models import Viewport

MOBILE_USER_AGENT = (
    "Mozilla/5.0 (Linux; Android 8.0.0; Pixel 2 XL Build/OPD1.170816.004) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/68.0.3440.75 Mobile Safari/537.36"
)

# Force web component polyfills so pages render the same regardless of
# native custom element and shadow DOM support.
POLYFILL_INIT_SCRIPTS = (
    "customElements.forcePolyfill = true",
    "ShadyDOM = {force: true}",
    "ShadyCSS = {shimcssproperties: true}",
)


class NavigationState(Enum):
    """Where a session stands between opening and serialization."""

    PENDING = "pending"
    CAPTURED = "captured"
    SETTLED = "settled"
    FAILED_WITH_CAPTURE = "failed_with_capture"
    FAILED_NO_CAPTURE = "failed_no_capture"


class Session:
    """One browsing context and its page, owned by a single request.

    The main frame's first navigation response is kept in
    ``captured_response``. Later responses never replace it. ``state``
    moves from PENDING to CAPTURED on that response and is settled by
    ``navigate``.
    """

    def __init__(self, context: BrowserContext, page: Page) -> None:
        self.context = context
        self.page = page
        self.captured_response: Response | None = None
        self.state = NavigationState.PENDING
        page.on("response", self._on_response)

    def _on_response(self, response: Response) -> None:
        if self.captured_response is not None:
            return
        if not response.request.is_navigation_request():
            return
        if response.frame != self.page.main_frame:
            return
        self.captured_response = response
        if self.state is NavigationState.PENDING:
            self.state = NavigationState.CAPTURED


@asynccontextmanager
async def open_session(
    browser: Browser,
    viewport: Viewport,
    is_mobile: bool,
    *,
    polyfills: bool = False,
) -> AsyncIterator[Session]:
    """Open a fresh browsing context and close it on every exit path.

    Args:
        browser: Shared browser instance. It is not modified.
        viewport: Viewport size for the new context.
        is_mobile: Emulate a mobile device and send the mobile user agent.
        polyfills: Install the web component polyfill flags before any page
            script runs.

    Yields:
        A Session whose response listener is already registered.
    """
    context = await browser.new_context(
        viewport={"width": viewport.width, "height": viewport.height},
        is_mobile=is_mobile,
        user_agent=MOBILE_USER_AGENT if is_mobile else None,
    )
    try:
        if polyfills:
            for script in POLYFILL_INIT_SCRIPTS:
                await context.add_init_script(script=script)
        page = await context.new_page()
        yield Session(context, page)
    finally:
        await context.close()
