"""Constants for the LocationIQ provider.

Endpoint templates, response family tags and the suburb allow-list used to
patch a known misclassification in autocomplete results.
"""

from enum import Enum
from typing import NamedTuple

PROVIDER_NAME = "locationiq"

SEARCH_PATH = "/search.php"
AUTOCOMPLETE_PATH = "/autocomplete.php"
REVERSE_PATH = "/reverse.php"

# Query parameters sent with every request of a family, before per-query ones
SEARCH_PARAMS = {"format": "xmlv1.1", "addressdetails": "1", "normalizecity": "1"}
AUTOCOMPLETE_PARAMS = {"addressdetails": "1", "normalizecity": "1"}
REVERSE_PARAMS = {"format": "xmlv1.1", "addressdetails": "1", "normalizecity": "1"}

# Provider options copied onto search and autocomplete URLs when set
PASSTHROUGH_OPTIONS = ("countrycodes", "tag", "dedupe", "viewbox")


class ResponseFamily(str, Enum):
    """Encoding of a LocationIQ response body."""

    JSON_AUTOCOMPLETE = "json-autocomplete"
    XML_SEARCH = "xml-search"
    XML_REVERSE = "xml-reverse"


class SuburbException(NamedTuple):
    """A place LocationIQ tags as ``place:suburb`` that must still be kept."""

    name: str
    postal_code: str


# LocationIQ classifies the La Défense business district as a plain suburb.
# Autocomplete drops suburbs, except for the entries listed here.
SUBURB_ALLOW_LIST: tuple[SuburbException, ...] = (
    SuburbException(name="La Défense", postal_code="92400"),
)
