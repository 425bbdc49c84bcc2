"""Pydantic v2 schemas for representatives and their voting records."""

from datetime import date

from pydantic import BaseModel, Field


class RepresentativeResponse(BaseModel):
    """A member of the Sejm."""

    model_config = {"from_attributes": True}

    id: int
    first_name: str
    last_name: str
    full_name: str
    club: str
    district_number: int | None = None
    district_name: str | None = None
    photo_url: str | None = None


class RepresentativeListResponse(BaseModel):
    """Filtered roster."""

    items: list[RepresentativeResponse]
    total: int
    district_number: int | None = Field(default=None, description="District filter applied, if any")


class VoteRecordResponse(BaseModel):
    """One chamber vote cast by a representative."""

    model_config = {"from_attributes": True}

    sitting_number: int
    voting_number: int
    date: date
    topic: str
    vote: str = Field(description="YES, NO, ABSTAIN or ABSENT")
    vote_label: str = Field(description="Polish label (ZA, PRZECIW, WSTRZYMAŁ SIĘ, NIEOBECNY)")
    url: str | None = None


class VoteHistoryResponse(BaseModel):
    """Aggregated vote history for one representative."""

    representative_id: int
    window_days: int = Field(description="Day window scanned so far")
    max_window_days: int
    can_load_more: bool
    loaded_once: bool
    votes: list[VoteRecordResponse]


class RefreshResponse(BaseModel):
    """Result of dropping and refetching cached Sejm data."""

    representatives: int
