"""Accumulate address fields and build a ``CanonicalAddress``.

A builder collects whatever a single raw place record provides and turns it
into an immutable address in one explicit step. ``build()`` never raises: it
returns a ``BuildResult`` holding either the address or the error. Builders
are single use; create one per record.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from geonorm.core.exceptions import AddressBuildError
from geonorm.models.address import AdminLevel, Bounds, CanonicalAddress, Coordinates


@dataclass(frozen=True)
class BuildResult:
    """Outcome of ``AddressBuilder.build``."""

    address: CanonicalAddress | None = None
    error: AddressBuildError | None = None

    @property
    def ok(self) -> bool:
        return self.address is not None

    def unwrap(self) -> CanonicalAddress:
        """Return the address or raise the build error."""
        if self.address is None:
            raise self.error or AddressBuildError("Address was not built")
        return self.address


class AddressBuilder:
    """Mutable accumulator for one canonical address."""

    def __init__(self, provided_by: str):
        self.provided_by = provided_by
        self._coordinates: tuple[Any, Any] | None = None
        self._bounds: tuple[Any, Any, Any, Any] | None = None
        self._fields: dict[str, str | None] = {}
        self._admin_levels: dict[int, tuple[str, str | None]] = {}
        self._built = False

    def set_coordinates(self, latitude: Any, longitude: Any) -> "AddressBuilder":
        self._coordinates = (latitude, longitude)
        return self

    def set_bounds(self, south: Any, north: Any, west: Any, east: Any) -> "AddressBuilder":
        self._bounds = (south, north, west, east)
        return self

    def set_street_number(self, street_number: str | None) -> "AddressBuilder":
        return self._set("street_number", street_number)

    def set_street_name(self, street_name: str | None) -> "AddressBuilder":
        return self._set("street_name", street_name)

    def set_locality(self, locality: str | None) -> "AddressBuilder":
        return self._set("locality", locality)

    def set_sub_locality(self, sub_locality: str | None) -> "AddressBuilder":
        return self._set("sub_locality", sub_locality)

    def set_postal_code(self, postal_code: str | None) -> "AddressBuilder":
        return self._set("postal_code", postal_code)

    def set_country(self, country: str | None) -> "AddressBuilder":
        return self._set("country", country)

    def set_country_code(self, country_code: str | None) -> "AddressBuilder":
        return self._set("country_code", country_code.upper() if country_code else country_code)

    def add_admin_level(self, level: int, name: str, code: str | None = None) -> "AddressBuilder":
        self._admin_levels[level] = (name, code or None)
        return self

    def build(self) -> BuildResult:
        """Validate the accumulated fields and produce the address.

        Returns:
            BuildResult with the address on success, or the
            ``AddressBuildError`` describing why the fields were rejected.
        """
        if self._built:
            return BuildResult(error=AddressBuildError("AddressBuilder instances are single use"))
        self._built = True

        if self._coordinates is None:
            return BuildResult(error=AddressBuildError("Coordinates are required"))

        try:
            coordinates = Coordinates(
                latitude=_to_float(self._coordinates[0]),
                longitude=_to_float(self._coordinates[1]),
            )
            bounds = None
            if self._bounds is not None:
                south, north, west, east = (_to_float(value) for value in self._bounds)
                bounds = Bounds(south=south, north=north, west=west, east=east)
            address = CanonicalAddress(
                provided_by=self.provided_by,
                coordinates=coordinates,
                bounds=bounds,
                admin_levels={
                    level: AdminLevel(level=level, name=name, code=code)
                    for level, (name, code) in sorted(self._admin_levels.items())
                },
                **self._fields,
            )
        except (TypeError, ValueError, ValidationError) as e:
            return BuildResult(error=AddressBuildError(f"Invalid address data: {e}"))

        return BuildResult(address=address)

    def _set(self, name: str, value: str | None) -> "AddressBuilder":
        if value is None:
            self._fields.pop(name, None)
        else:
            self._fields[name] = value
        return self


def _to_float(value: Any) -> float:
    if isinstance(value, str):
        value = value.strip()
    return float(value)
