"""Pydantic v2 schemas for electoral districts and postal-code resolution."""

from pydantic import BaseModel, Field


class DistrictSummaryResponse(BaseModel):
    """District summary for list endpoints."""

    model_config = {"from_attributes": True}

    district_number: int = Field(description="District number (1-41)")
    seat_city: str = Field(description="Seat of the district electoral commission")
    voivodeship: str | None = None
    scope: str = Field(description="'enumerated' or 'whole_voivodeship'")
    seats: int | None = Field(default=None, description="Number of Sejm seats")


class DistrictDetailResponse(DistrictSummaryResponse):
    """Full district descriptor with its member counties and cities."""

    counties: list[str] = Field(default_factory=list)
    cities: list[str] = Field(default_factory=list)
    description: str = ""
    population: int | None = None
    voters: int | None = None


class NormalizedLocationResponse(BaseModel):
    """Geocoded location after alias resolution and county repair."""

    voivodeship: str | None = None
    county: str | None = None
    city: str | None = None


class DistrictResolutionResponse(BaseModel):
    """Result of resolving a postal code to a district."""

    postal_code: str
    district_number: int
    seat_city: str
    tier: str = Field(description="Lookup tier that produced the match")
    location: NormalizedLocationResponse
    iso_code: str | None = Field(default=None, description="ISO 3166-2 voivodeship code from the geocoder")
