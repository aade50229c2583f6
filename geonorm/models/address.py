"""Canonical address model shared by every LocationIQ response family."""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Coordinates(BaseModel):
    """A WGS84 point."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


class Bounds(BaseModel):
    """Bounding box in the provider's ``boundingbox`` order."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    south: float = Field(..., description="Southern latitude boundary")
    north: float = Field(..., description="Northern latitude boundary")
    west: float = Field(..., description="Western longitude boundary")
    east: float = Field(..., description="Eastern longitude boundary")


class AdminLevel(BaseModel):
    """One rung of the administrative hierarchy (1 = state, 2 = county/city)."""

    model_config = ConfigDict(frozen=True)

    level: int = Field(..., ge=1, le=5)
    name: str
    code: str | None = None


class CanonicalAddress(BaseModel):
    """Normalized address, independent of the response family it came from.

    Instances are produced by ``AddressBuilder`` and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    provided_by: str = Field(..., description="Name of the provider that produced the address")
    coordinates: Coordinates
    bounds: Bounds | None = None
    street_number: str | None = None
    street_name: str | None = None
    sub_locality: str | None = None
    locality: str | None = None
    postal_code: str | None = None
    country: str | None = None
    country_code: str | None = None
    admin_levels: dict[int, AdminLevel] = Field(default_factory=dict)

    @field_validator("postal_code")
    @classmethod
    def single_postal_code(cls, value: str | None) -> str | None:
        if value is not None and ";" in value:
            raise ValueError("postal_code must hold a single code")
        return value

    @field_validator("country_code")
    @classmethod
    def upper_country_code(cls, value: str | None) -> str | None:
        if value is not None and not re.fullmatch(r"[A-Z]{2,}", value):
            raise ValueError("country_code must be two or more upper case letters")
        return value

    @model_validator(mode="after")
    def admin_level_keys_match(self) -> "CanonicalAddress":
        for key, admin_level in self.admin_levels.items():
            if key != admin_level.level:
                raise ValueError(f"admin level stored under {key} declares level {admin_level.level}")
        return self

    @property
    def latitude(self) -> float:
        return self.coordinates.latitude

    @property
    def longitude(self) -> float:
        return self.coordinates.longitude

    def to_dict(self) -> dict[str, Any]:
        """Flatten the address into plain data.

        Returns:
            Mapping with coordinates and bounds expanded into scalar keys and
            admin levels as a list ordered by level.
        """
        bounds = self.bounds.model_dump() if self.bounds else {}
        return {
            "providedBy": self.provided_by,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "bounds": {
                "south": bounds.get("south"),
                "west": bounds.get("west"),
                "north": bounds.get("north"),
                "east": bounds.get("east"),
            },
            "streetNumber": self.street_number,
            "streetName": self.street_name,
            "postalCode": self.postal_code,
            "locality": self.locality,
            "subLocality": self.sub_locality,
            "adminLevels": [
                {"level": level.level, "name": level.name, "code": level.code}
                for level in self.admin_levels.values()
            ],
            "country": self.country,
            "countryCode": self.country_code,
        }
