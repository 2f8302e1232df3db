"""Resolve the HTTP status reported for a rendered page.

Pages can declare their own status with
``<meta name="render:status_code" content="404">``. The declared value is
only honoured when the server itself answered 200; a real server error is
never masked by document content.
"""

from __future__ import annotations

import re

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

STATUS_META_SELECTOR = 'meta[name="render:status_code"]'
READ_CONTENT_SCRIPT = "element => element.getAttribute('content')"

HTTP_OK = 200
HTTP_NOT_MODIFIED = 304
STATUS_MIN = 100
STATUS_MAX = 599

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_status_override(raw: object) -> int | None:
    """Parse a declared status the way ``parseInt`` reads it.

    Leading digits are used and trailing junk is ignored, so ``"404abc"``
    yields 404. Anything that does not produce a status in 100..599 yields
    None.
    """
    if not isinstance(raw, str):
        return None
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    value = int(match.group(1))
    if not STATUS_MIN <= value <= STATUS_MAX:
        return None
    return value


async def read_status_override(page: Page) -> int | None:
    """Read the page-declared status, or None if absent or malformed."""
    try:
        raw = await page.eval_on_selector(STATUS_META_SELECTOR, READ_CONTENT_SCRIPT)
    except PlaywrightError:
        return None
    return parse_status_override(raw)


def resolve_status(transport_status: int, override: int | None) -> int:
    """Combine the server's status with an optional page-declared one.

    Args:
        transport_status: Status of the captured response.
        override: Page-declared status, if any.

    Returns:
        The status to report. 304 is treated as 200 because a fresh session
        only sees it when the browser cache answered.
    """
    status = HTTP_OK if transport_status == HTTP_NOT_MODIFIED else transport_status
    if status == HTTP_OK and override is not None:
        return override
    return status
