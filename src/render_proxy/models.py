"""Request and result types for the rendering pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

# Screenshots always get a fixed navigation deadline.
SCREENSHOT_TIMEOUT_MS = 10000

NO_RESPONSE_STATUS = 400
FORBIDDEN_STATUS = 403


@dataclass(frozen=True)
class Viewport:
    """Browser viewport size in CSS pixels."""

    width: int
    height: int


@dataclass(frozen=True)
class RenderRequest:
    """Input to one run of the render path."""

    url: str
    is_mobile: bool
    device_width: int
    device_height: int
    timeout_ms: int

    @property
    def viewport(self) -> Viewport:
        return Viewport(self.device_width, self.device_height)


@dataclass(frozen=True)
class ScreenshotRequest:
    """Input to one run of the screenshot path.

    ``encoding_options`` are passed through to the engine's screenshot call,
    except that the image type is always forced to JPEG.
    """

    url: str
    is_mobile: bool
    width: int
    height: int
    encoding_options: Mapping[str, Any] = field(default_factory=dict)
    timeout_ms: int = SCREENSHOT_TIMEOUT_MS

    @property
    def viewport(self) -> Viewport:
        return Viewport(self.width, self.height)


@dataclass(frozen=True)
class SerializedResult:
    """Outcome of the render path.

    Attributes:
        status: HTTP status to report to the caller.
        content: Serialized document markup. Empty for sentinel results.
    """

    status: int
    content: str

    @classmethod
    def no_response(cls) -> SerializedResult:
        return cls(status=NO_RESPONSE_STATUS, content="")

    @classmethod
    def forbidden(cls) -> SerializedResult:
        return cls(status=FORBIDDEN_STATUS, content="")
