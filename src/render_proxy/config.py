"""Central configuration for render-proxy."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from render_proxy.validation import ValidationError, validate_dimension

# Defaults
DEFAULT_WIDTH = 1000
DEFAULT_HEIGHT = 1000
DEFAULT_TIMEOUT_MS = 10000

# Environment
CONFIG_PATH_ENV = "RENDER_PROXY_CONFIG"
ENV_PREFIX = "RENDER_PROXY_"
_ENV_KEYS = ("width", "height", "timeout")


class ConfigError(Exception):
    """Raised when configuration cannot be loaded."""

    def __init__(self, message: str, source: str) -> None:
        """Initialize ConfigError.

        Args:
            message: Error description.
            source: Where the bad value came from (file path or env var).
        """
        self.message = message
        self.source = source
        super().__init__(f"{source}: {message}")


@dataclass(frozen=True)
class Config:
    """Renderer defaults.

    Attributes:
        width: Viewport width for the render path.
        height: Viewport height for the render path.
        timeout: Navigation deadline for the render path, in milliseconds.
        headless: Launch the browser without a window.
        browser_args: Extra Chromium command-line switches.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    timeout: int = DEFAULT_TIMEOUT_MS
    headless: bool = True
    browser_args: tuple[str, ...] = ()


def load_config(path: Path | None = None) -> Config:
    """Build a Config from defaults, an optional JSON file and the environment.

    Precedence, lowest first: built-in defaults, the JSON file (``path`` or
    the file named by ``RENDER_PROXY_CONFIG``), then ``RENDER_PROXY_WIDTH``,
    ``RENDER_PROXY_HEIGHT`` and ``RENDER_PROXY_TIMEOUT``. Unknown keys in the
    file are ignored.

    Args:
        path: Optional JSON config file.

    Returns:
        The merged configuration.

    Raises:
        ConfigError: If the file is unreadable or a value is invalid.
    """
    config = Config()

    if path is None and os.environ.get(CONFIG_PATH_ENV):
        path = Path(os.environ[CONFIG_PATH_ENV])

    if path is not None:
        config = replace(config, **_read_config_file(path))

    overrides: dict[str, Any] = {}
    for key in _ENV_KEYS:
        env_name = f"{ENV_PREFIX}{key.upper()}"
        raw = os.environ.get(env_name)
        if raw is None:
            continue
        try:
            overrides[key] = int(raw)
        except ValueError:
            raise ConfigError(f"expected an integer, got {raw!r}", env_name) from None
    config = replace(config, **overrides)

    _validate(config)
    return config


def _read_config_file(path: Path) -> dict[str, Any]:
    """Read known keys from a JSON config file."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"cannot read config file: {e}", str(path)) from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid JSON: {e}", str(path)) from e

    if not isinstance(data, dict):
        raise ConfigError("config file must contain a JSON object", str(path))

    known = {f.name for f in fields(Config)}
    values = {key: value for key, value in data.items() if key in known}
    if isinstance(values.get("browser_args"), list):
        values["browser_args"] = tuple(values["browser_args"])
    return values


def _validate(config: Config) -> None:
    try:
        validate_dimension(config.width, field_name="width")
        validate_dimension(config.height, field_name="height")
    except ValidationError as e:
        raise ConfigError(e.message, e.field) from e

    if isinstance(config.timeout, bool) or not isinstance(config.timeout, int):
        raise ConfigError("must be an integer", "timeout")
    if config.timeout <= 0:
        raise ConfigError("must be positive", "timeout")

    if not isinstance(config.headless, bool):
        raise ConfigError("must be true or false", "headless")

    if not isinstance(config.browser_args, tuple) or not all(
        isinstance(arg, str) for arg in config.browser_args
    ):
        raise ConfigError("must be a list of strings", "browser_args")
