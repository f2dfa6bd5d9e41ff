"""
Errors that abort a listing population pass.

Anything else that goes wrong while extracting (bad JSON-LD, an unknown
@type, an unparsable date) is recorded on ``Listing.diagnostics`` instead.
"""

__all__ = ["ListingError", "InputError", "ConnectionError", "FetchError", "ParseError"]


class ListingError(Exception):
    """Base class for fatal population errors."""


class InputError(ListingError):
    """The listing URL is empty or cannot be requested at all."""


class ConnectionError(ListingError):  # noqa: A001
    """The origin could not be reached (DNS, refused, TLS, timeout)."""


class FetchError(ListingError):
    def __init__(self, status_code: int, url: str = ""):
        self.status_code = status_code
        self.url = url
        super().__init__(f"expected 2xx response, got {status_code}" + (f" for {url}" if url else ""))


class ParseError(ListingError):
    """The fetched body could not be turned into a document tree."""
