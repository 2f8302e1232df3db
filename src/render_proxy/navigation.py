"""Drive a session to its target URL under a deadline."""

from __future__ import annotations

from dataclasses import dataclass

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Response

from render_proxy.logging import get_logger
from render_proxy.session import NavigationState, Session

WAIT_UNTIL = "networkidle"


@dataclass(frozen=True)
class NavigationOutcome:
    """Result of one navigation attempt.

    Attributes:
        state: SETTLED, FAILED_WITH_CAPTURE or FAILED_NO_CAPTURE.
        response: The response to build the result from, if any.
        error: Engine error message when navigation failed.
    """

    state: NavigationState
    response: Response | None
    error: str | None = None


async def navigate(session: Session, url: str, timeout_ms: int) -> NavigationOutcome:
    """Navigate and wait for the network to go idle.

    A timeout or transport error does not fail the request: it is logged and
    the response captured before the failure is used instead. When
    navigation settles, the engine's own response (the final one after
    redirects) wins over the captured one.

    Args:
        session: An open session with its response listener registered.
        url: Target URL.
        timeout_ms: Navigation deadline in milliseconds.

    Returns:
        The navigation outcome. ``response`` is None when nothing was
        received at all.
    """
    log = get_logger(url=url)
    try:
        response = await session.page.goto(url, timeout=timeout_ms, wait_until=WAIT_UNTIL)
    except PlaywrightError as e:
        log.warning("Navigation failed", error=str(e), timeout_ms=timeout_ms)
        captured = session.captured_response
        if captured is None:
            session.state = NavigationState.FAILED_NO_CAPTURE
        else:
            session.state = NavigationState.FAILED_WITH_CAPTURE
        return NavigationOutcome(session.state, captured, str(e))

    if response is None:
        response = session.captured_response
    session.state = NavigationState.SETTLED
    return NavigationOutcome(session.state, response)
