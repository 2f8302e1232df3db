"""In-page cleanup applied before the document is serialized."""

from __future__ import annotations

from urllib.parse import urlsplit

from playwright.async_api import Page

from render_proxy.logging import get_logger

# Removes executable scripts and HTML imports. Scripts with a non-JS type,
# such as JSON data islands, are kept.
STRIP_PAGE_SCRIPT = """() => {
  const elements = document.querySelectorAll(
    'script:not([type]), script[type*="javascript"], link[rel=import]');
  for (const e of Array.from(elements)) {
    e.remove();
  }
  return elements.length;
}"""

# Points relative resources at the request origin. A root-relative <base>
# is made absolute, a missing one is inserted, any other is left alone.
INJECT_BASE_HREF_SCRIPT = """(origin) => {
  if (!document.head) {
    return 'skipped';
  }
  const bases = document.head.querySelectorAll('base');
  if (bases.length) {
    const existing = bases[0].getAttribute('href') || '';
    if (existing.startsWith('/')) {
      bases[0].setAttribute('href', origin + existing);
      return 'patched';
    }
    return 'kept';
  }
  const base = document.createElement('base');
  base.setAttribute('href', origin);
  document.head.insertAdjacentElement('afterbegin', base);
  return 'inserted';
}"""


def request_origin(url: str) -> str:
    """Return ``scheme://host[:port]`` for a URL, without credentials."""
    parts = urlsplit(url)
    host = parts.netloc.rpartition("@")[2].lower()
    return f"{parts.scheme}://{host}"


async def strip_scripts(page: Page) -> int:
    """Remove script and import elements. Returns how many were removed."""
    return await page.evaluate(STRIP_PAGE_SCRIPT)


async def inject_base_href(page: Page, origin: str) -> str:
    """Ensure the document has a usable <base>.

    Returns:
        One of ``"inserted"``, ``"patched"``, ``"kept"`` or ``"skipped"``
        (the document has no head).
    """
    return await page.evaluate(INJECT_BASE_HREF_SCRIPT, origin)


async def sanitize_document(page: Page, request_url: str) -> None:
    """Freeze the document and anchor it to the original request origin."""
    log = get_logger(url=request_url)
    removed = await strip_scripts(page)
    base_action = await inject_base_href(page, request_origin(request_url))
    log.debug("Document sanitized", removed=removed, base=base_action)
