"""Split LocationIQ response bodies into raw per-place records.

Autocomplete responses are JSON arrays of place objects. Search and reverse
responses are XML documents (``format=xmlv1.1``). The parser only checks the
structure of the document; field extraction is left to the mappers.
"""

import json
import xml.etree.ElementTree as ElementTree
from typing import Any, NamedTuple

from geonorm.core.exceptions import InvalidServerResponse
from geonorm.core.logging import get_logger
from geonorm.geocoding.constants import ResponseFamily

logger = get_logger().bind(module="response_parser")


class XmlPlace(NamedTuple):
    """A result element and the element holding its address parts.

    For search results both are the same ``place`` element.
    """

    result_node: ElementTree.Element
    address_node: ElementTree.Element


JsonPlace = dict[str, Any]
RawPlaceRecord = JsonPlace | XmlPlace


def parse_json_places(body: str, url: str | None = None) -> list[JsonPlace]:
    """Decode an autocomplete body into place dictionaries.

    Raises:
        InvalidServerResponse: If the body is not a JSON array of objects
    """
    try:
        places = json.loads(body)
    except (TypeError, ValueError) as e:
        logger.warning("json_response_undecodable", url=url, error=str(e))
        raise _invalid(url) from e

    if not isinstance(places, list) or not all(isinstance(p, dict) for p in places):
        logger.warning("json_response_not_a_place_list", url=url)
        raise _invalid(url)

    logger.debug("json_places_parsed", url=url, count=len(places))
    return places


def parse_search_places(body: str, url: str | None = None) -> list[XmlPlace]:
    """Extract ``place`` elements from a ``searchresults`` document.

    Returns:
        One record per ``place`` element, in document order; empty when the
        search matched nothing

    Raises:
        InvalidServerResponse: If the body is not XML or has no
            ``searchresults`` element
    """
    root = _parse_xml(body)
    search_results = next(root.iter("searchresults"), None) if root is not None else None
    if search_results is None:
        logger.warning("search_response_invalid", url=url)
        raise _invalid(url)

    places = [XmlPlace(place, place) for place in search_results.iter("place")]
    logger.debug("search_places_parsed", url=url, count=len(places))
    return places


def parse_reverse_places(body: str, url: str | None = None) -> list[XmlPlace]:
    """Extract the single result of a ``reversegeocode`` document.

    Unparsable documents and documents reporting an ``error`` mean the
    coordinates matched nothing, so both give an empty list.

    Raises:
        InvalidServerResponse: If the document parses but lacks the
            ``reversegeocode``, ``result`` or ``addressparts`` element
    """
    root = _parse_xml(body)
    if root is None:
        logger.info("reverse_response_unparsable", url=url)
        return []
    if next(root.iter("error"), None) is not None:
        logger.info("reverse_no_match", url=url)
        return []

    reverse = next(root.iter("reversegeocode"), None)
    if reverse is None:
        raise _invalid(url)
    address_parts = next(reverse.iter("addressparts"), None)
    result = next(reverse.iter("result"), None)
    if address_parts is None or result is None:
        raise _invalid(url)

    return [XmlPlace(result, address_parts)]


def parse_response(
    body: str, family: ResponseFamily | str, url: str | None = None
) -> list[RawPlaceRecord]:
    """Parse a response body of the given family into raw place records."""
    family = ResponseFamily(family)
    if family is ResponseFamily.JSON_AUTOCOMPLETE:
        return parse_json_places(body, url)
    if family is ResponseFamily.XML_SEARCH:
        return parse_search_places(body, url)
    return parse_reverse_places(body, url)


def _parse_xml(body: str) -> ElementTree.Element | None:
    try:
        return ElementTree.fromstring(body)  # noqa: S314
    except ElementTree.ParseError as e:
        logger.debug("xml_parse_error", error=str(e))
        return None


def _invalid(url: str | None) -> InvalidServerResponse:
    if url is None:
        return InvalidServerResponse("The geocoder server returned an invalid response.")
    return InvalidServerResponse.create(url)
