"""Quality gate applied to autocomplete places before mapping."""

from collections.abc import Iterable

from geonorm.core.logging import get_logger
from geonorm.geocoding.constants import SUBURB_ALLOW_LIST
from geonorm.geocoding.parser import JsonPlace

logger = get_logger().bind(module="suburb_filter")


def is_suburb(place: JsonPlace) -> bool:
    return place.get("class") == "place" and place.get("type") == "suburb"


def is_allowed_suburb(place: JsonPlace) -> bool:
    """Check a suburb against ``SUBURB_ALLOW_LIST`` by name or postal code."""
    address = place.get("address") or {}
    name = address.get("name")
    postal_code = address.get("postcode")
    return any(
        name == exception.name or postal_code == exception.postal_code
        for exception in SUBURB_ALLOW_LIST
    )


def filter_places(places: Iterable[JsonPlace]) -> list[JsonPlace]:
    """Drop ``place:suburb`` results that are not on the allow-list.

    Order of the remaining places is preserved.
    """
    kept = []
    for place in places:
        if is_suburb(place) and not is_allowed_suburb(place):
            logger.debug(
                "suburb_dropped",
                name=(place.get("address") or {}).get("name"),
                place_id=place.get("place_id"),
            )
            continue
        kept.append(place)
    return kept
