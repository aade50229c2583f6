"""LocationIQ geocoding provider.

This module ties the pieces together:
- Builds search, autocomplete and reverse endpoint URLs
- Fetches response bodies through an ``HttpTransport``
- Parses each response family into raw place records
- Maps every record onto a ``CanonicalAddress``, in response order
"""

from collections.abc import Callable
from typing import Any
from urllib.parse import quote_plus, urlencode

from geonorm.core.config import settings
from geonorm.core.exceptions import AddressBuildError, InvalidCredentials, InvalidServerResponse
from geonorm.core.logging import get_logger, redact_url
from geonorm.geocoding.builder import BuildResult
from geonorm.geocoding.constants import (
    AUTOCOMPLETE_PARAMS,
    AUTOCOMPLETE_PATH,
    PASSTHROUGH_OPTIONS,
    PROVIDER_NAME,
    REVERSE_PARAMS,
    REVERSE_PATH,
    SEARCH_PARAMS,
    SEARCH_PATH,
    ResponseFamily,
)
from geonorm.geocoding.filters import filter_places
from geonorm.geocoding.json_mapper import map_json_place
from geonorm.geocoding.parser import parse_response
from geonorm.geocoding.transport import HttpTransport, RequestsTransport
from geonorm.geocoding.xml_mapper import map_xml_place
from geonorm.models.address import Coordinates
from geonorm.models.collection import AddressCollection
from geonorm.models.query import GeocodeQuery, ReverseQuery

logger = get_logger().bind(module="locationiq_provider")

# Maps one raw place record to a build result; one per response family
PlaceMapper = Callable[[Any, str], BuildResult]

PLACE_MAPPERS: dict[ResponseFamily, PlaceMapper] = {
    ResponseFamily.JSON_AUTOCOMPLETE: map_json_place,
    ResponseFamily.XML_SEARCH: map_xml_place,
    ResponseFamily.XML_REVERSE: map_xml_place,
}


class LocationIQ:
    """Geocoding provider for the LocationIQ API."""

    def __init__(
        self,
        transport: HttpTransport | None = None,
        api_key: str | None = None,
        base_url: str | None = None,
    ):
        """Initialize the provider.

        Args:
            transport: Transport used to fetch bodies, ``RequestsTransport`` by default
            api_key: LocationIQ key, read from ``LOCATIONIQ_API_KEY`` when omitted
            base_url: API root, read from ``LOCATIONIQ_BASE_URL`` when omitted

        Raises:
            InvalidCredentials: If no API key is available
        """
        api_key = api_key if api_key is not None else settings.LOCATIONIQ_API_KEY
        if not api_key:
            raise InvalidCredentials("No API key provided.")

        self._api_key = api_key
        self.base_url = (base_url or settings.LOCATIONIQ_BASE_URL).rstrip("/")
        self.transport = transport or RequestsTransport()

    @property
    def name(self) -> str:
        return PROVIDER_NAME

    def geocode(self, query: GeocodeQuery | str) -> AddressCollection:
        """Geocode free text, through autocomplete when the query asks for it."""
        if isinstance(query, str):
            query = GeocodeQuery(text=query)

        if query.autocomplete:
            url = self.autocomplete_url(query)
            family = ResponseFamily.JSON_AUTOCOMPLETE
        else:
            url = self.search_url(query)
            family = ResponseFamily.XML_SEARCH

        return self._execute(url, family, query.locale)

    def reverse_geocode(
        self,
        query: ReverseQuery | Coordinates | tuple[float, float],
        locale: str | None = None,
        zoom: int | None = None,
    ) -> AddressCollection:
        """Look up the address at a coordinate.

        Args:
            query: A ``ReverseQuery`` or a (latitude, longitude) pair
            locale: Response language, when ``query`` is not a ``ReverseQuery``
            zoom: Detail level, when ``query`` is not a ``ReverseQuery``

        Returns:
            A collection with the matched address, or an empty one
        """
        if isinstance(query, Coordinates):
            query = query.as_tuple()
        if not isinstance(query, ReverseQuery):
            latitude, longitude = query
            query = ReverseQuery(latitude=latitude, longitude=longitude, locale=locale, zoom=zoom)

        return self._execute(self.reverse_url(query), ResponseFamily.XML_REVERSE, query.locale)

    def search_url(self, query: GeocodeQuery) -> str:
        params = {"q": query.text, **SEARCH_PARAMS, "limit": query.limit, "key": self._api_key}
        return self._url(SEARCH_PATH, params, _passthrough(query))

    def autocomplete_url(self, query: GeocodeQuery) -> str:
        params = {"q": query.text, **AUTOCOMPLETE_PARAMS, "limit": query.limit, "key": self._api_key}
        return self._url(AUTOCOMPLETE_PATH, params, _passthrough(query))

    def reverse_url(self, query: ReverseQuery) -> str:
        zoom = query.zoom if query.zoom is not None else settings.LOCATIONIQ_REVERSE_ZOOM
        params = {
            "format": REVERSE_PARAMS["format"],
            "lat": f"{query.latitude:f}",
            "lon": f"{query.longitude:f}",
            "addressdetails": REVERSE_PARAMS["addressdetails"],
            "normalizecity": REVERSE_PARAMS["normalizecity"],
            "zoom": zoom,
            "key": self._api_key,
        }
        return self._url(REVERSE_PATH, params)

    def _url(self, path: str, params: dict[str, Any], extra: dict[str, Any] | None = None) -> str:
        query_string = urlencode({**params, **(extra or {})}, quote_via=quote_plus, safe=",:")
        return f"{self.base_url}{path}?{query_string}"

    def _execute(self, url: str, family: ResponseFamily, locale: str | None) -> AddressCollection:
        if locale is not None:
            url = f"{url}&{urlencode({'accept-language': locale})}"

        safe_url = redact_url(url)
        logger.info("locationiq_request", url=safe_url, family=family.value)
        body = self.transport.get_text(url)

        places = parse_response(body, family, safe_url)
        if family is ResponseFamily.JSON_AUTOCOMPLETE:
            places = filter_places(places)

        mapper = PLACE_MAPPERS[family]
        addresses = []
        for place in places:
            try:
                addresses.append(mapper(place, self.name).unwrap())
            except AddressBuildError as e:
                logger.warning("place_rejected", url=safe_url, error=str(e))
                raise InvalidServerResponse(str(e), url=safe_url) from e

        logger.info("locationiq_response", url=safe_url, count=len(addresses))
        return AddressCollection(addresses)


def _passthrough(query: GeocodeQuery) -> dict[str, Any]:
    options = {}
    for option in PASSTHROUGH_OPTIONS:
        value = getattr(query, option)
        if value:
            options[option] = value
    return options


# Singleton instance
_provider: LocationIQ | None = None


def get_locationiq_provider() -> LocationIQ:
    """Get or create the shared provider configured from settings.

    Returns:
        LocationIQ instance
    """
    global _provider
    if _provider is None:
        _provider = LocationIQ()
    return _provider
