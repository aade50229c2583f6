"""LocationIQ geocoding module.

This package provides:
- Response parsing for the autocomplete, search and reverse families
- Mapping of raw places onto the canonical address model
- The LocationIQ provider and its HTTP transport
"""

from geonorm.geocoding.builder import AddressBuilder, BuildResult
from geonorm.geocoding.constants import SUBURB_ALLOW_LIST, ResponseFamily
from geonorm.geocoding.filters import filter_places
from geonorm.geocoding.json_mapper import map_json_place
from geonorm.geocoding.parser import XmlPlace, parse_response
from geonorm.geocoding.provider import LocationIQ, get_locationiq_provider
from geonorm.geocoding.transport import HttpTransport, RequestsTransport
from geonorm.geocoding.xml_mapper import first_child_text, map_xml_place

__all__ = [
    "AddressBuilder",
    "BuildResult",
    "ResponseFamily",
    "SUBURB_ALLOW_LIST",
    "filter_places",
    "map_json_place",
    "map_xml_place",
    "first_child_text",
    "XmlPlace",
    "parse_response",
    "LocationIQ",
    "get_locationiq_provider",
    "HttpTransport",
    "RequestsTransport",
]
