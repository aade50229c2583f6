"""Query models accepted by the LocationIQ provider."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from geonorm.core.config import settings


class GeocodeQuery(BaseModel):
    """Free-text forward geocoding query.

    Provider options are passed through to the request URL verbatim.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    text: str = Field(..., min_length=1, description="Address or place to look up")
    limit: int = Field(
        default_factory=lambda: settings.LOCATIONIQ_DEFAULT_LIMIT,
        ge=1,
        description="Maximum number of results, LOCATIONIQ_DEFAULT_LIMIT by default",
    )
    locale: str | None = Field(
        default=None,
        description="Preferred response language, sent as accept-language",
        examples=["fr"],
    )
    countrycodes: str | None = Field(
        default=None,
        description="Comma separated ISO 3166-1 alpha-2 codes restricting results",
        examples=["fr,be"],
    )
    tag: str | None = Field(
        default=None,
        description="Restrict results to OSM class:type pairs",
        examples=["place:city"],
    )
    dedupe: int | None = Field(default=None, description="Provider deduplication flag")
    viewbox: str | None = Field(
        default=None,
        description="Preferred area as x1,y1,x2,y2",
        examples=["2.2,48.9,2.4,48.8"],
    )
    autocomplete: bool = Field(
        default=False, description="Use the autocomplete endpoint instead of search"
    )

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Geocode query text cannot be blank")
        return value


class ReverseQuery(BaseModel):
    """Coordinate to address lookup."""

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    latitude: float
    longitude: float
    locale: str | None = None
    zoom: int | None = Field(
        default=None,
        ge=0,
        le=18,
        description="Address detail level, 18 being building level",
    )
