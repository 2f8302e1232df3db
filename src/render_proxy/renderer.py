"""Render dynamic pages into static HTML or JPEG snapshots.

``Renderer`` wraps a shared Playwright browser. Every call opens its own
browsing context, so concurrent requests never share DOM state, and closes
that context before returning.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from playwright.async_api import Browser

from render_proxy.config import Config
from render_proxy.logging import get_logger
from render_proxy.models import (
    RenderRequest,
    ScreenshotRequest,
    SerializedResult,
    Viewport,
)
from render_proxy.navigation import navigate
from render_proxy.sanitize import sanitize_document
from render_proxy.security import any_metadata_response
from render_proxy.serializer import capture_jpeg, serialize_document
from render_proxy.session import open_session
from render_proxy.status import read_status_override, resolve_status


class ScreenshotErrorType(Enum):
    """Reasons a screenshot cannot be produced."""

    NO_RESPONSE = "NoResponse"
    FORBIDDEN = "Forbidden"


class ScreenshotError(Exception):
    """Raised when the screenshot path cannot produce an image."""

    def __init__(self, error_type: ScreenshotErrorType, url: str = "") -> None:
        """Initialize ScreenshotError.

        Args:
            error_type: Why the screenshot failed.
            url: The URL that was requested.
        """
        self.error_type = error_type
        self.url = url
        super().__init__(error_type.value)


class Renderer:
    """Render pages in isolated sessions on a shared browser."""

    def __init__(self, browser: Browser, config: Config) -> None:
        """Initialize Renderer.

        Args:
            browser: Running browser owned by the caller.
            config: Viewport and timeout defaults for the render path.
        """
        self._browser = browser
        self._config = config

    async def serialize(self, url: str, is_mobile: bool) -> SerializedResult:
        """Render ``url`` and return its status and serialized markup.

        Navigation failures do not raise. A missing response yields status
        400 and a metadata-service response yields 403, both with empty
        content.
        """
        request = RenderRequest(
            url=url,
            is_mobile=is_mobile,
            device_width=self._config.width,
            device_height=self._config.height,
            timeout_ms=self._config.timeout,
        )
        return await self.serialize_request(request)

    async def serialize_request(self, request: RenderRequest) -> SerializedResult:
        """Run the render path for a fully specified request."""
        log = get_logger(url=request.url)

        async with open_session(
            self._browser, request.viewport, request.is_mobile, polyfills=True
        ) as session:
            outcome = await navigate(session, request.url, request.timeout_ms)
            response = outcome.response

            if response is None:
                log.error("No response captured", state=session.state.value)
                return SerializedResult.no_response()

            if any_metadata_response(session.captured_response, response):
                log.warning("Refusing to render compute metadata response")
                return SerializedResult.forbidden()

            override = await read_status_override(session.page)
            status = resolve_status(response.status, override)
            if override is not None:
                log.debug("Page declared status", declared=override, status=status)

            await sanitize_document(session.page, request.url)
            content = await serialize_document(session.page)

        log.info(
            "Page rendered",
            status=status,
            state=session.state.value,
            content_length=len(content),
        )
        return SerializedResult(status=status, content=content)

    async def screenshot(
        self,
        url: str,
        is_mobile: bool,
        dimensions: Viewport,
        options: Mapping[str, Any] | None = None,
    ) -> bytes:
        """Render ``url`` and return a JPEG of the viewport.

        Raises:
            ScreenshotError: NO_RESPONSE when nothing was received,
                FORBIDDEN for a metadata-service response.
        """
        request = ScreenshotRequest(
            url=url,
            is_mobile=is_mobile,
            width=dimensions.width,
            height=dimensions.height,
            encoding_options=dict(options or {}),
        )
        return await self.screenshot_request(request)

    async def screenshot_request(self, request: ScreenshotRequest) -> bytes:
        """Run the screenshot path for a fully specified request."""
        log = get_logger(url=request.url)

        async with open_session(
            self._browser, request.viewport, request.is_mobile
        ) as session:
            outcome = await navigate(session, request.url, request.timeout_ms)
            response = outcome.response

            if response is None:
                log.error("No response captured", state=session.state.value)
                raise ScreenshotError(ScreenshotErrorType.NO_RESPONSE, request.url)

            if any_metadata_response(session.captured_response, response):
                log.warning("Refusing to screenshot compute metadata response")
                raise ScreenshotError(ScreenshotErrorType.FORBIDDEN, request.url)

            image = await capture_jpeg(session.page, request.encoding_options)

        log.info("Screenshot captured", size=len(image))
        return image
