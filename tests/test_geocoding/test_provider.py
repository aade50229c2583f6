"""Tests for the LocationIQ provider."""

import json
from urllib.parse import parse_qs, urlsplit

import pytest
from pytest_mock import MockerFixture

from geonorm.core.exceptions import AddressBuildError, InvalidCredentials, InvalidServerResponse
from geonorm.geocoding import LocationIQ, get_locationiq_provider
from geonorm.geocoding.transport import RequestsTransport
from geonorm.models import AddressCollection, Coordinates, GeocodeQuery, ReverseQuery
from tests.fixtures import (
    EMPTY_SEARCH_XML,
    REVERSE_ERROR_XML,
    REVERSE_XML,
    SEARCH_XML,
    json_place,
)


def query_params(url: str) -> dict[str, str]:
    return {key: values[0] for key, values in parse_qs(urlsplit(url).query).items()}


@pytest.fixture
def provider(fake_transport) -> LocationIQ:
    return LocationIQ(fake_transport, "api_key")


class TestConstruction:
    """Provider construction and credentials."""

    def test_empty_api_key_raises(self, fake_transport):
        """Test an empty key fails before any request is made."""
        with pytest.raises(InvalidCredentials, match="No API key provided."):
            LocationIQ(fake_transport, "")

        assert fake_transport.urls == []

    def test_api_key_from_settings(self, fake_transport, mocker: MockerFixture):
        """Test the key falls back to LOCATIONIQ_API_KEY."""
        mocker.patch("geonorm.geocoding.provider.settings.LOCATIONIQ_API_KEY", "from_settings")

        provider = LocationIQ(fake_transport)
        fake_transport.body = EMPTY_SEARCH_XML
        provider.geocode("Paris")

        assert query_params(fake_transport.urls[0])["key"] == "from_settings"

    def test_missing_api_key_in_settings_raises(self, fake_transport, mocker: MockerFixture):
        """Test a missing configured key is refused."""
        mocker.patch("geonorm.geocoding.provider.settings.LOCATIONIQ_API_KEY", None)

        with pytest.raises(InvalidCredentials):
            LocationIQ(fake_transport)

    def test_name(self, provider):
        """Test the provider name."""
        assert provider.name == "locationiq"

    def test_default_transport(self):
        """Test a requests transport is created when none is given."""
        assert isinstance(LocationIQ(api_key="api_key").transport, RequestsTransport)

    def test_singleton(self, clean_provider_singleton):
        """Test the shared provider is created once."""
        assert get_locationiq_provider() is get_locationiq_provider()


class TestSearch:
    """Forward geocoding through the XML search endpoint."""

    def test_search_results_in_order(self, provider, fake_transport):
        """Test search places map to addresses in document order."""
        fake_transport.body = SEARCH_XML

        addresses = provider.geocode(GeocodeQuery(text="10 avenue Gambetta, Paris"))

        assert isinstance(addresses, AddressCollection)
        assert [a.street_name for a in addresses] == ["Avenue Gambetta", "Rue Piétonne"]
        assert addresses.first().postal_code == "75020"

    def test_search_url(self, provider, fake_transport):
        """Test the search URL carries the fixed and per-query parameters."""
        fake_transport.body = EMPTY_SEARCH_XML

        provider.geocode(
            GeocodeQuery(
                text="La Défense",
                limit=3,
                locale="fr",
                countrycodes="fr,be",
                tag="place:city",
                dedupe=1,
                viewbox="2.2,48.9,2.4,48.8",
            )
        )

        url = fake_transport.urls[0]
        assert url.startswith("https://api.locationiq.com/v1/search.php?q=La+D%C3%A9fense&")
        assert "countrycodes=fr,be" in url
        assert query_params(url) == {
            "q": "La Défense",
            "format": "xmlv1.1",
            "addressdetails": "1",
            "normalizecity": "1",
            "limit": "3",
            "key": "api_key",
            "countrycodes": "fr,be",
            "tag": "place:city",
            "dedupe": "1",
            "viewbox": "2.2,48.9,2.4,48.8",
            "accept-language": "fr",
        }

    def test_unset_options_omitted(self, provider, fake_transport):
        """Test options left unset are not sent."""
        fake_transport.body = EMPTY_SEARCH_XML

        provider.geocode(GeocodeQuery(text="Paris"))

        params = query_params(fake_transport.urls[0])
        for option in ("countrycodes", "tag", "dedupe", "viewbox", "accept-language"):
            assert option not in params

    def test_plain_text_query(self, provider, fake_transport):
        """Test a string is accepted as query text."""
        fake_transport.body = EMPTY_SEARCH_XML

        assert provider.geocode("Paris").is_empty()
        assert query_params(fake_transport.urls[0])["limit"] == "5"

    def test_no_places(self, provider, fake_transport):
        """Test an empty searchresults document gives an empty collection."""
        fake_transport.body = EMPTY_SEARCH_XML

        assert len(provider.geocode(GeocodeQuery(text="nowhere"))) == 0

    def test_missing_root_raises(self, provider, fake_transport):
        """Test a document without searchresults is a malformed response."""
        fake_transport.body = "<html><body>Gateway error</body></html>"

        with pytest.raises(InvalidServerResponse) as exc_info:
            provider.geocode(GeocodeQuery(text="Paris"))

        assert "api_key" not in str(exc_info.value)

    def test_unbuildable_place_raises(self, provider, fake_transport):
        """Test a place without coordinates is a malformed response."""
        fake_transport.body = "<searchresults><place><city>Paris</city></place></searchresults>"

        with pytest.raises(InvalidServerResponse) as exc_info:
            provider.geocode(GeocodeQuery(text="Paris"))

        assert isinstance(exc_info.value.__cause__, AddressBuildError)
        assert exc_info.value.url.endswith("key=<redacted>")

class TestAutocomplete:
    """Forward geocoding through the JSON autocomplete endpoint."""

    def test_dispatches_to_autocomplete(self, provider, fake_transport, autocomplete_json):
        """Test the autocomplete flag selects the JSON endpoint and filter."""
        fake_transport.body = autocomplete_json

        addresses = provider.geocode(GeocodeQuery(text="Par", autocomplete=True, limit=10))

        url = fake_transport.urls[0]
        assert urlsplit(url).path == "/v1/autocomplete.php"
        assert query_params(url) == {
            "q": "Par",
            "addressdetails": "1",
            "normalizecity": "1",
            "limit": "10",
            "key": "api_key",
        }
        assert [a.locality for a in addresses] == ["Paris", "La Défense"]

    def test_malformed_json_raises(self, provider, fake_transport):
        """Test an undecodable autocomplete body raises."""
        fake_transport.body = "<html>"

        with pytest.raises(InvalidServerResponse):
            provider.geocode(GeocodeQuery(text="Par", autocomplete=True))

    def test_way_place(self, provider, fake_transport):
        """Test way places carry the street through the provider."""
        fake_transport.body = json.dumps(
            [json_place(osm_type="way", type="residential", address={"name": "Rue de Rivoli", "house_number": "1"})]
        )

        address = provider.geocode(GeocodeQuery(text="Rue de Rivoli", autocomplete=True)).first()

        assert address.street_name == "Rue de Rivoli"
        assert address.street_number == "1"


class TestReverse:
    """Reverse geocoding through the XML reverse endpoint."""

    def test_reverse_match(self, provider, fake_transport):
        """Test a reverse document gives a single address."""
        fake_transport.body = REVERSE_XML

        addresses = provider.reverse_geocode(ReverseQuery(latitude=48.85, longitude=2.35))

        assert len(addresses) == 1
        address = addresses.first()
        assert address.coordinates.as_tuple() == (48.85, 2.35)
        assert address.country_code == "FR"
        assert address.bounds.model_dump() == {"south": 48.8, "north": 48.9, "west": 2.3, "east": 2.4}

    def test_reverse_url(self, provider, fake_transport):
        """Test coordinates use six decimals and zoom defaults to 18."""
        fake_transport.body = REVERSE_ERROR_XML

        provider.reverse_geocode((48.85, 2.35))

        url = fake_transport.urls[0]
        assert urlsplit(url).path == "/v1/reverse.php"
        assert query_params(url) == {
            "format": "xmlv1.1",
            "lat": "48.850000",
            "lon": "2.350000",
            "addressdetails": "1",
            "normalizecity": "1",
            "zoom": "18",
            "key": "api_key",
        }

    def test_reverse_locale_and_zoom(self, provider, fake_transport):
        """Test locale and zoom given alongside coordinates."""
        fake_transport.body = REVERSE_ERROR_XML

        provider.reverse_geocode(Coordinates(latitude=48.85, longitude=2.35), locale="de", zoom=10)

        params = query_params(fake_transport.urls[0])
        assert params["zoom"] == "10"
        assert params["accept-language"] == "de"

    def test_reverse_no_match(self, provider, fake_transport):
        """Test an error document gives an empty collection."""
        fake_transport.body = REVERSE_ERROR_XML

        assert provider.reverse_geocode((0.0, 0.0)).is_empty()

    def test_reverse_unparsable(self, provider, fake_transport):
        """Test an unparsable reverse body gives an empty collection."""
        fake_transport.body = "Service temporarily unavailable"

        assert len(provider.reverse_geocode((0.0, 0.0))) == 0

    def test_custom_base_url(self, fake_transport):
        """Test a regional endpoint can be configured."""
        fake_transport.body = REVERSE_ERROR_XML
        provider = LocationIQ(fake_transport, "api_key", base_url="https://eu1.locationiq.com/v1/")

        provider.reverse_geocode((1.0, 2.0))

        assert fake_transport.urls[0].startswith("https://eu1.locationiq.com/v1/reverse.php?")
