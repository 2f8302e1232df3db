"""Validation utilities for render-proxy."""

from urllib.parse import urlsplit

ALLOWED_SCHEMES = frozenset({"http", "https"})
DIMENSION_MIN = 1
DIMENSION_MAX = 10000


class ValidationError(Exception):
    """Raised when validation fails."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


def validate_url(value: str, field_name: str = "url") -> str:
    """Validate a URL that the renderer may navigate to.

    Args:
        value: The URL to validate.
        field_name: Name of the field for error messages.

    Returns:
        The URL with surrounding whitespace removed.

    Raises:
        ValidationError: If the URL is empty, not http(s), or has no host.
    """
    stripped = value.strip() if value else ""
    if not stripped:
        raise ValidationError(field_name, "cannot be empty")

    parsed = urlsplit(stripped)
    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise ValidationError(field_name, "must use the http or https scheme")

    if not parsed.hostname:
        raise ValidationError(field_name, "must include a host")

    return stripped


def is_valid_url(value: str) -> bool:
    """Check if a string is a renderable URL without raising.

    Args:
        value: The string to check.

    Returns:
        True if valid, False otherwise.
    """
    try:
        validate_url(value)
        return True
    except ValidationError:
        return False


def validate_dimension(value: object, field_name: str = "dimension") -> int:
    """Validate a viewport dimension in CSS pixels.

    Args:
        value: The value to validate. Booleans are rejected.
        field_name: Name of the field for error messages.

    Returns:
        The dimension as an int.

    Raises:
        ValidationError: If the value is not an int in the allowed range.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field_name, "must be an integer")

    if not DIMENSION_MIN <= value <= DIMENSION_MAX:
        raise ValidationError(
            field_name, f"must be between {DIMENSION_MIN} and {DIMENSION_MAX}"
        )

    return value
