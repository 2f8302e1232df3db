"""CLI module for render-proxy."""

import asyncio
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from render_proxy import __version__
from render_proxy.browser import BrowserError, launch_browser
from render_proxy.config import Config, ConfigError, load_config
from render_proxy.logging import configure_logging, get_logger
from render_proxy.models import SerializedResult, Viewport
from render_proxy.renderer import Renderer, ScreenshotError
from render_proxy.validation import ValidationError, validate_dimension, validate_url

# Rendered HTML goes to stdout; everything else goes to stderr.
console = Console(stderr=True)

app = typer.Typer(
    name="render-proxy",
    help="Render dynamic web pages to static HTML or JPEG snapshots.",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit.

    Args:
        value: Whether the version flag was provided.
    """
    if value:
        console.print(f"render-proxy version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose output")
    ] = False,
    _version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """Render dynamic web pages to static HTML or JPEG snapshots."""
    # Initialize logging once at startup
    configure_logging(verbose=verbose)
    log = get_logger()

    if verbose:
        log.debug("Verbose mode enabled")


def fail(message: str) -> typer.Exit:
    """Print an error message and return the exit to raise."""
    console.print(f"[red]Error:[/red] {message}")
    return typer.Exit(code=1)


def _load_config(config_path: Path | None) -> Config:
    try:
        return load_config(config_path)
    except ConfigError as e:
        raise fail(str(e)) from None


async def _render(url: str, is_mobile: bool, config: Config) -> SerializedResult:
    async with launch_browser(config) as browser:
        return await Renderer(browser, config).serialize(url, is_mobile)


async def _screenshot(
    url: str,
    is_mobile: bool,
    viewport: Viewport,
    options: dict[str, Any],
    config: Config,
) -> bytes:
    async with launch_browser(config) as browser:
        return await Renderer(browser, config).screenshot(
            url, is_mobile, viewport, options
        )


@app.command(name="render")
def render_cmd(
    url: Annotated[str, typer.Argument(help="URL of the page to render.")],
    mobile: Annotated[
        bool, typer.Option("--mobile", "-m", help="Emulate a mobile device")
    ] = False,
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="JSON config file")
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write HTML here instead of stdout"),
    ] = None,
) -> None:
    """Render a page and print its serialized HTML.

    Exits with code 1 when the reported status is 400 or above.
    """
    log = get_logger()

    try:
        url = validate_url(url)
    except ValidationError as e:
        raise fail(e.message) from None

    config = _load_config(config_path)

    try:
        result = asyncio.run(_render(url, mobile, config))
    except BrowserError as e:
        log.error("Browser failed to start", error=e.message)
        raise fail(f"Browser failed to start: {e.message}") from None

    if output is not None:
        output.write_text(result.content, encoding="utf-8")
    elif result.content:
        typer.echo(result.content)

    console.print(f"Status: {result.status}")
    if result.status >= 400:
        raise typer.Exit(code=1)


@app.command(name="screenshot")
def screenshot_cmd(
    url: Annotated[str, typer.Argument(help="URL of the page to capture.")],
    output: Annotated[
        Path, typer.Option("--output", "-o", help="Where to write the JPEG")
    ],
    mobile: Annotated[
        bool, typer.Option("--mobile", "-m", help="Emulate a mobile device")
    ] = False,
    width: Annotated[
        int | None, typer.Option("--width", help="Viewport width")
    ] = None,
    height: Annotated[
        int | None, typer.Option("--height", help="Viewport height")
    ] = None,
    quality: Annotated[
        int | None,
        typer.Option("--quality", "-q", min=0, max=100, help="JPEG quality"),
    ] = None,
    full_page: Annotated[
        bool, typer.Option("--full-page", help="Capture the full scrollable page")
    ] = False,
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="JSON config file")
    ] = None,
) -> None:
    """Render a page and save a JPEG snapshot of it."""
    log = get_logger()
    config = _load_config(config_path)

    try:
        url = validate_url(url)
        viewport = Viewport(
            width=validate_dimension(
                width if width is not None else config.width, field_name="width"
            ),
            height=validate_dimension(
                height if height is not None else config.height, field_name="height"
            ),
        )
    except ValidationError as e:
        raise fail(str(e)) from None

    options: dict[str, Any] = {"full_page": full_page}
    if quality is not None:
        options["quality"] = quality

    try:
        image = asyncio.run(_screenshot(url, mobile, viewport, options, config))
    except BrowserError as e:
        log.error("Browser failed to start", error=e.message)
        raise fail(f"Browser failed to start: {e.message}") from None
    except ScreenshotError as e:
        log.error("Screenshot failed", url=url, reason=e.error_type.value)
        raise fail(f"Screenshot failed: {e.error_type.value}") from None

    output.write_bytes(image)
    console.print(f"Saved {len(image)} bytes to {output}")


if __name__ == "__main__":
    app()
