"""Map autocomplete JSON places onto ``CanonicalAddress``.

Admin levels cascade: level 2 is only filled in when level 1 was found on
the same place. Which address keys feed each level depends on the place
classification (``class``/``type``).
"""

from typing import Any

from geonorm.core.logging import get_logger
from geonorm.geocoding.builder import AddressBuilder, BuildResult
from geonorm.geocoding.constants import PROVIDER_NAME
from geonorm.geocoding.parser import JsonPlace

logger = get_logger().bind(module="json_mapper")

LOCALITY_TYPES = frozenset({"city", "town", "village"})


def map_json_place(place: JsonPlace, provided_by: str = PROVIDER_NAME) -> BuildResult:
    """Build an address from one autocomplete place.

    Args:
        place: Decoded place object from the autocomplete array
        provided_by: Provider name recorded on the address

    Returns:
        BuildResult for the place
    """
    address: dict[str, Any] = place.get("address") or {}
    builder = AddressBuilder(provided_by)

    builder.set_sub_locality(address.get("suburb"))
    builder.set_country(address.get("country"))
    builder.set_coordinates(place.get("lat"), place.get("lon"))

    if place.get("osm_type") == "way":
        builder.set_street_name(address.get("name"))
        builder.set_street_number(address.get("house_number"))

    if country_code := address.get("country_code"):
        builder.set_country_code(country_code.upper())

    bounding_box = place.get("boundingbox")
    if isinstance(bounding_box, str):
        bounding_box = bounding_box.split(",")
    if bounding_box:
        if len(bounding_box) == 4:
            builder.set_bounds(*bounding_box)
        else:
            logger.debug("bounding_box_ignored", size=len(bounding_box))

    if postcode := address.get("postcode"):
        builder.set_postal_code(postcode.split(";")[0])

    _add_admin_levels(builder, place["type"], place["class"], address)

    return builder.build()


def _add_admin_levels(
    builder: AddressBuilder, place_type: str, place_class: str, address: dict[str, Any]
) -> None:
    if place_type == "state":
        _cascade(builder, address.get("name"))
    elif place_type == "administrative":
        _cascade(builder, address.get("state"), _coalesce(address.get("city"), address.get("name")))
    elif place_type in LOCALITY_TYPES:
        builder.set_locality(address.get("name"))
        _cascade(builder, address.get("state"), _coalesce(address.get("county"), address.get("city")))
    elif place_class == "landuse" and place_type == "commercial":
        # business parks (technopoles)
        builder.set_locality(address.get("name"))
        _cascade(builder, address.get("state"), address.get("county"))
    elif place_class == "place" and place_type == "suburb":
        builder.set_locality(address.get("name"))
        _cascade(builder, address.get("state"), address.get("county"))


def _cascade(builder: AddressBuilder, level_1: str | None, level_2: str | None = None) -> None:
    if level_1 is None:
        return
    builder.add_admin_level(1, level_1)
    if level_2 is not None:
        builder.add_admin_level(2, level_2)


def _coalesce(*values: str | None) -> str | None:
    return next((value for value in values if value is not None), None)
