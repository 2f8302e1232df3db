"""Guard against rendering cloud metadata endpoints."""

from playwright.async_api import Response

# Header and value sent by GCE metadata servers. Header names arrive
# lower-cased from the engine; the value match is exact.
METADATA_FLAVOR_HEADER = "metadata-flavor"
METADATA_FLAVOR_VALUE = "Google"


def is_metadata_response(response: Response) -> bool:
    """Return True if the response came from a compute metadata service."""
    return response.headers.get(METADATA_FLAVOR_HEADER) == METADATA_FLAVOR_VALUE


def any_metadata_response(*responses: Response | None) -> bool:
    """Return True if any of the given responses came from a metadata service.

    Covers both the first captured response and the final one, so a
    metadata reply that redirects elsewhere is still rejected.
    """
    return any(r is not None and is_metadata_response(r) for r in responses)
