"""District API endpoints: list, detail and postal-code resolution."""

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from sejm_api.core.dependencies import get_district_set, get_geocoder, get_resolver
from sejm_api.lib.districts import DISTRICT_COUNT, DistrictDescriptor, DistrictResolver, DistrictSet
from sejm_api.lib.geocoder import BaseGeocoder, GeocodingProviderError
from sejm_api.schemas.common import ErrorResponse
from sejm_api.schemas.district import (
    DistrictDetailResponse,
    DistrictResolutionResponse,
    DistrictSummaryResponse,
    NormalizedLocationResponse,
)
from sejm_api.services.district_service import get_district, list_districts, resolve_district

districts_router = APIRouter(prefix="/districts", tags=["districts"])

_NOT_FOUND: dict[int | str, dict] = {404: {"model": ErrorResponse}}
_UPSTREAM: dict[int | str, dict] = {502: {"model": ErrorResponse}}
_ERRORS = {**_NOT_FOUND, **_UPSTREAM}


def _detail(descriptor: DistrictDescriptor) -> DistrictDetailResponse:
    return DistrictDetailResponse(
        district_number=descriptor.district_number,
        seat_city=descriptor.seat_city,
        voivodeship=descriptor.voivodeship,
        scope=descriptor.scope.value,
        seats=descriptor.seats,
        counties=list(descriptor.counties),
        cities=list(descriptor.cities),
        description=descriptor.description,
        population=descriptor.population,
        voters=descriptor.voters,
    )


@districts_router.get("", response_model=list[DistrictSummaryResponse])
async def list_districts_endpoint(
    district_set: DistrictSet = Depends(get_district_set),  # noqa: B008
) -> list[DistrictSummaryResponse]:
    """List all Sejm electoral districts."""
    return [
        DistrictSummaryResponse(
            district_number=d.district_number,
            seat_city=d.seat_city,
            voivodeship=d.voivodeship,
            scope=d.scope.value,
            seats=d.seats,
        )
        for d in list_districts(district_set)
    ]


@districts_router.get("/resolve", response_model=DistrictResolutionResponse, responses=_ERRORS)
async def resolve_district_endpoint(
    postal_code: str = Query(  # noqa: B008
        ...,
        min_length=1,
        max_length=10,
        description="Polish postal code, NN-NNN or NNNNN",
    ),
    geocoder: BaseGeocoder = Depends(get_geocoder),  # noqa: B008
    resolver: DistrictResolver = Depends(get_resolver),  # noqa: B008
) -> DistrictResolutionResponse:
    """Resolve a postal code to its Sejm electoral district."""
    try:
        resolution = await resolve_district(geocoder, resolver, postal_code)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e
    except GeocodingProviderError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Geocoding provider is temporarily unavailable. Please retry later.",
        ) from e

    if resolution is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Could not determine the electoral district for this postal code.",
        )

    location = resolution.match.location
    return DistrictResolutionResponse(
        postal_code=resolution.postal_code,
        district_number=resolution.district_number,
        seat_city=resolution.descriptor.seat_city,
        tier=resolution.match.tier.value,
        location=NormalizedLocationResponse(
            voivodeship=location.voivodeship,
            county=location.county,
            city=location.city,
        ),
        iso_code=resolution.geocoded.iso_code,
    )


@districts_router.get("/{district_number}", response_model=DistrictDetailResponse, responses=_NOT_FOUND)
async def get_district_endpoint(
    district_number: int = Path(..., ge=1, le=DISTRICT_COUNT),  # noqa: B008
    district_set: DistrictSet = Depends(get_district_set),  # noqa: B008
) -> DistrictDetailResponse:
    """Get one district with its counties and cities."""
    descriptor = get_district(district_set, district_number)
    if descriptor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="District not found")
    return _detail(descriptor)
