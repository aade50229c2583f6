"""Address and query models package."""

from .address import AdminLevel, Bounds, CanonicalAddress, Coordinates
from .collection import AddressCollection
from .query import GeocodeQuery, ReverseQuery

__all__ = [
    "AdminLevel",
    "Bounds",
    "CanonicalAddress",
    "Coordinates",
    "AddressCollection",
    "GeocodeQuery",
    "ReverseQuery",
]
