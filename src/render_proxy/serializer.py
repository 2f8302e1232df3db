"""Extract the final artifact from a rendered page."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from playwright.async_api import Page

SERIALIZE_SCRIPT = (
    "document.firstElementChild ? document.firstElementChild.outerHTML : ''"
)

SCREENSHOT_TYPE = "jpeg"
# Keys the engine does not accept; it always returns raw bytes.
_DROPPED_SCREENSHOT_OPTIONS = frozenset({"encoding"})


async def serialize_document(page: Page) -> str:
    """Return the outer markup of the document's root element."""
    return await page.evaluate(SERIALIZE_SCRIPT)


def screenshot_options(options: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge caller options with the forced JPEG encoding.

    Caller values such as ``quality`` or ``full_page`` are kept; ``type`` is
    always overridden.
    """
    merged = {
        key: value
        for key, value in (options or {}).items()
        if key not in _DROPPED_SCREENSHOT_OPTIONS
    }
    merged["type"] = SCREENSHOT_TYPE
    return merged


async def capture_jpeg(page: Page, options: Mapping[str, Any] | None = None) -> bytes:
    """Capture the viewport as a JPEG buffer."""
    return await page.screenshot(**screenshot_options(options))
