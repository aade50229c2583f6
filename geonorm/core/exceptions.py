"""Exceptions raised by the LocationIQ provider.

Provider errors extend the ``geopy.exc`` hierarchy so callers already
handling geopy geocoder failures catch them without extra clauses.
"""

from geopy.exc import GeocoderAuthenticationFailure, GeocoderParseError


class InvalidCredentials(GeocoderAuthenticationFailure):
    """Raised when the provider is constructed without an API key."""


class InvalidServerResponse(GeocoderParseError):
    """Raised when a response body cannot be turned into places."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url

    @classmethod
    def create(cls, url: str) -> "InvalidServerResponse":
        """Build the error for a response fetched from ``url``."""
        return cls(f'The geocoder server returned an invalid response for query "{url}".', url=url)


class AddressBuildError(ValueError):
    """Raised when accumulated address fields violate an invariant."""


class CollectionIsEmpty(IndexError):  # noqa: N818
    """Raised when the first address of an empty collection is requested."""


class OutOfBounds(IndexError):  # noqa: N818
    """Raised when an address index is outside the collection."""
