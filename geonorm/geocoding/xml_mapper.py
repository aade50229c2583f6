"""Map search and reverse XML places onto ``CanonicalAddress``."""

import xml.etree.ElementTree as ElementTree

from geonorm.core.logging import get_logger
from geonorm.geocoding.builder import AddressBuilder, BuildResult
from geonorm.geocoding.constants import PROVIDER_NAME
from geonorm.geocoding.parser import XmlPlace

logger = get_logger().bind(module="xml_mapper")

# Element holding each admin level, level 1 first
ADMIN_LEVEL_TAGS = ("state", "county")


def first_child_text(node: ElementTree.Element, tag: str) -> str | None:
    """Return the text of the first ``tag`` element below ``node``.

    Returns:
        The element text (empty string for an empty element), or None when
        no such element exists
    """
    element = next((e for e in node.iter(tag) if e is not node), None)
    if element is None:
        return None
    return element.text or ""


def map_xml_place(place: XmlPlace, provided_by: str = PROVIDER_NAME) -> BuildResult:
    """Build an address from a result node and its address node.

    Admin levels are independent: ``county`` is kept even without ``state``.
    """
    result_node, address_node = place
    builder = AddressBuilder(provided_by)

    for level, tag in enumerate(ADMIN_LEVEL_TAGS, start=1):
        name = first_child_text(address_node, tag)
        if name is not None:
            builder.add_admin_level(level, name)

    # several postal codes are separated by ";", keep the first
    postal_code = first_child_text(address_node, "postcode")
    if postal_code:
        postal_code = postal_code.split(";")[0]
    builder.set_postal_code(postal_code)

    builder.set_street_name(
        first_child_text(address_node, "road") or first_child_text(address_node, "pedestrian")
    )
    builder.set_street_number(first_child_text(address_node, "house_number"))
    builder.set_locality(first_child_text(address_node, "city"))
    builder.set_sub_locality(first_child_text(address_node, "suburb"))
    builder.set_country(first_child_text(address_node, "country"))
    builder.set_coordinates(result_node.get("lat"), result_node.get("lon"))

    country_code = first_child_text(address_node, "country_code")
    if country_code:
        builder.set_country_code(country_code.upper())

    bounds = result_node.get("boundingbox")
    if bounds:
        values = bounds.split(",")
        if len(values) == 4:
            south, north, west, east = values
            builder.set_bounds(south, north, west, east)
        else:
            logger.debug("bounding_box_ignored", boundingbox=bounds)

    return builder.build()
