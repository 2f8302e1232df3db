"""Shared test fixtures."""

from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from render_proxy.config import Config
from render_proxy.logging import configure_logging
from tests.fakes import FakePage


@pytest.fixture(autouse=True)
def fresh_logging() -> Generator[None, None, None]:
    """Start every test from a clean structlog configuration."""
    structlog.reset_defaults()
    configure_logging()
    yield
    structlog.reset_defaults()


@pytest.fixture
def page() -> FakePage:
    return FakePage()


@pytest.fixture
def context(page: FakePage) -> MagicMock:
    """Browser context that hands out the fake page."""
    ctx = MagicMock(name="context")
    ctx.new_page = AsyncMock(return_value=page)
    ctx.add_init_script = AsyncMock()
    ctx.close = AsyncMock()
    return ctx


@pytest.fixture
def browser(context: MagicMock) -> MagicMock:
    """Shared browser that opens the fake context."""
    instance = MagicMock(name="browser")
    instance.new_context = AsyncMock(return_value=context)
    return instance


@pytest.fixture
def config() -> Config:
    return Config(width=800, height=600, timeout=5000)
