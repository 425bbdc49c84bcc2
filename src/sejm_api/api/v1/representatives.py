"""Representative API endpoints: roster filtering, refresh and voting records."""

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from loguru import logger

from sejm_api.core.dependencies import get_geocoder, get_resolver, get_sejm_session
from sejm_api.lib.districts import DISTRICT_COUNT, DistrictResolver
from sejm_api.lib.geocoder import BaseGeocoder, GeocodingProviderError
from sejm_api.lib.sejm import AggregationState, Representative, SejmApiError
from sejm_api.schemas.common import ErrorResponse
from sejm_api.schemas.representative import (
    RefreshResponse,
    RepresentativeListResponse,
    RepresentativeResponse,
    VoteHistoryResponse,
    VoteRecordResponse,
)
from sejm_api.services import representative_service
from sejm_api.services.representative_service import SejmSession

representatives_router = APIRouter(prefix="/representatives", tags=["representatives"])

_NOT_FOUND: dict[int | str, dict] = {404: {"model": ErrorResponse}}
_UPSTREAM: dict[int | str, dict] = {502: {"model": ErrorResponse}}
_ERRORS = {**_NOT_FOUND, **_UPSTREAM}

_SEJM_UNAVAILABLE = "Sejm API is temporarily unavailable. Please retry later."


def _representative(rep: Representative) -> RepresentativeResponse:
    return RepresentativeResponse(
        id=rep.id,
        first_name=rep.first_name,
        last_name=rep.last_name,
        full_name=rep.full_name,
        club=rep.club,
        district_number=rep.district_number,
        district_name=rep.district_name,
        photo_url=rep.photo_url,
    )


def _history(mp_id: int, state: AggregationState, max_window_days: int) -> VoteHistoryResponse:
    return VoteHistoryResponse(
        representative_id=mp_id,
        window_days=state.window_days,
        max_window_days=max_window_days,
        can_load_more=state.window_days < max_window_days,
        loaded_once=state.loaded_once,
        votes=[
            VoteRecordResponse(
                sitting_number=v.sitting_number,
                voting_number=v.voting_number,
                date=v.date,
                topic=v.topic,
                vote=v.vote.value,
                vote_label=v.vote_label,
                url=v.url,
            )
            for v in state.votes
        ],
    )


@representatives_router.get("", response_model=RepresentativeListResponse, responses=_ERRORS)
async def list_representatives_endpoint(
    district: int | None = Query(None, ge=1, le=DISTRICT_COUNT, description="District number filter"),  # noqa: B008
    name: str | None = Query(None, max_length=100, description="Name substring, any order"),  # noqa: B008
    postal_code: str | None = Query(None, max_length=10, description="Postal code resolved to a district"),  # noqa: B008
    session: SejmSession = Depends(get_sejm_session),  # noqa: B008
    geocoder: BaseGeocoder = Depends(get_geocoder),  # noqa: B008
    resolver: DistrictResolver = Depends(get_resolver),  # noqa: B008
) -> RepresentativeListResponse:
    """List representatives, optionally filtered by district, name or postal code."""
    try:
        reps, district_number = await representative_service.list_representatives(
            session,
            district=district,
            name=name,
            postal_code=postal_code,
            geocoder=geocoder,
            resolver=resolver,
        )
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e
    except GeocodingProviderError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Geocoding provider is temporarily unavailable. Please retry later.",
        ) from e
    except SejmApiError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=_SEJM_UNAVAILABLE) from e

    return RepresentativeListResponse(
        items=[_representative(rep) for rep in reps],
        total=len(reps),
        district_number=district_number,
    )


@representatives_router.post("/refresh", response_model=RefreshResponse)
async def refresh_endpoint(
    session: SejmSession = Depends(get_sejm_session),  # noqa: B008
) -> RefreshResponse:
    """Drop cached roster, calendar and vote history, then refetch the roster."""
    try:
        roster = await representative_service.refresh(session)
    except SejmApiError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=_SEJM_UNAVAILABLE) from e
    return RefreshResponse(representatives=len(roster))


@representatives_router.get("/{mp_id}", response_model=RepresentativeResponse, responses=_ERRORS)
async def get_representative_endpoint(
    mp_id: int = Path(..., ge=1),  # noqa: B008
    session: SejmSession = Depends(get_sejm_session),  # noqa: B008
) -> RepresentativeResponse:
    """Get one representative by Sejm id."""
    try:
        rep = await representative_service.get_representative(session, mp_id)
    except SejmApiError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=_SEJM_UNAVAILABLE) from e
    if rep is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Representative not found")
    return _representative(rep)


@representatives_router.get("/{mp_id}/votes", response_model=VoteHistoryResponse, responses=_ERRORS)
async def get_votes_endpoint(
    mp_id: int = Path(..., ge=1),  # noqa: B008
    session: SejmSession = Depends(get_sejm_session),  # noqa: B008
) -> VoteHistoryResponse:
    """Get the representative's vote history, loading the first page on first call."""
    try:
        state = await representative_service.get_votes(session, mp_id)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Representative not found") from e
    except SejmApiError as e:
        logger.error(f"Vote load failed for MP {mp_id}: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=_SEJM_UNAVAILABLE) from e
    return _history(mp_id, state, session.aggregator.max_window_days)


@representatives_router.post("/{mp_id}/votes/more", response_model=VoteHistoryResponse, responses=_ERRORS)
async def load_more_votes_endpoint(
    mp_id: int = Path(..., ge=1),  # noqa: B008
    session: SejmSession = Depends(get_sejm_session),  # noqa: B008
) -> VoteHistoryResponse:
    """Widen the vote window by one step and merge newly found votes."""
    try:
        state = await representative_service.load_more_votes(session, mp_id)
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Representative not found") from e
    except SejmApiError as e:
        logger.error(f"Loading more votes failed for MP {mp_id}: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=_SEJM_UNAVAILABLE) from e
    return _history(mp_id, state, session.aggregator.max_window_days)
