"""Sejm library: representatives, sittings and voting records.

Public API:
    - SejmClient / fetch_json: Sejm open-data API client
    - Representative / VoteRecord / VoteChoice / Sitting: Domain types
    - SejmApiError: Transport/service error
    - sort_roster / filter_roster / RosterStore: Roster handling
    - AsyncMemo / ProceedingsCache / GenerationTracker: Shared async state
    - VotingAggregator / AggregationState: Expanding-window vote history
"""

from sejm_api.lib.sejm.base import (
    DEFAULT_VOTE_TOPIC,
    INDEPENDENT_CLUB,
    Representative,
    SejmApiError,
    Sitting,
    VoteChoice,
    VoteRecord,
)
from sejm_api.lib.sejm.cache import AsyncMemo, GenerationTracker, ProceedingsCache
from sejm_api.lib.sejm.client import SejmClient, fetch_json
from sejm_api.lib.sejm.roster import RosterStore, filter_roster, matches_name, sort_roster
from sejm_api.lib.sejm.votes import (
    AggregationState,
    VotingAggregator,
    candidate_days,
    collect_votes,
    fetch_recent_votes,
    merge_votes,
    sort_votes,
)

__all__ = [
    "DEFAULT_VOTE_TOPIC",
    "INDEPENDENT_CLUB",
    "AggregationState",
    "AsyncMemo",
    "GenerationTracker",
    "ProceedingsCache",
    "Representative",
    "RosterStore",
    "SejmApiError",
    "SejmClient",
    "Sitting",
    "VoteChoice",
    "VoteRecord",
    "VotingAggregator",
    "candidate_days",
    "collect_votes",
    "fetch_json",
    "fetch_recent_votes",
    "filter_roster",
    "matches_name",
    "merge_votes",
    "sort_roster",
    "sort_votes",
]
