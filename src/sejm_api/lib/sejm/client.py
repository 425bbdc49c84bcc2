"""Sejm open-data API client (https://api.sejm.gov.pl/sejm/openapi/)."""

from __future__ import annotations

import asyncio
import json
from datetime import date, datetime
from typing import Any
from urllib.parse import urlencode

import httpx
from loguru import logger

from sejm_api.lib.sejm.base import (
    DEFAULT_VOTE_TOPIC,
    INDEPENDENT_CLUB,
    Representative,
    SejmApiError,
    Sitting,
    VoteChoice,
    VoteRecord,
)

DEFAULT_BASE_URL = "https://api.sejm.gov.pl/sejm"
DEFAULT_WEB_BASE_URL = "https://www.sejm.gov.pl"
DEFAULT_TERM = 10
DEFAULT_TIMEOUT = 15.0


async def fetch_json(
    client: httpx.AsyncClient,
    path: str,
    *,
    params: dict[str, Any] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    provider_name: str = "sejm",
) -> Any:
    """GET ``path`` and decode its JSON body within a wall-clock timeout.

    The timeout covers the whole exchange (connect, transfer, decode) and
    is cancelled on every exit path.

    Raises:
        SejmApiError: On timeout, transport error, non-2xx status or a
            non-JSON body.
    """
    try:
        response = await asyncio.wait_for(client.get(path, params=params or {}), timeout=timeout)
        response.raise_for_status()
        return response.json()
    except (TimeoutError, httpx.TimeoutException) as exc:
        logger.error("Sejm API request timed out after {}s for {}", timeout, path)
        raise SejmApiError(provider_name, f"Request timed out for {path}") from exc
    except httpx.HTTPStatusError as exc:
        logger.error(
            "Sejm API error: {} {} for {}",
            exc.response.status_code,
            exc.response.reason_phrase,
            path,
        )
        raise SejmApiError(
            provider_name,
            f"HTTP {exc.response.status_code}: {exc.response.reason_phrase}",
            status_code=exc.response.status_code,
        ) from exc
    except httpx.RequestError as exc:
        logger.error("Sejm API request failed: {}", exc)
        raise SejmApiError(provider_name, f"Request failed: {exc}") from exc
    except json.JSONDecodeError as exc:
        logger.error("Sejm API returned non-JSON response for {}", path)
        raise SejmApiError(provider_name, f"Invalid JSON response for {path}") from exc


class SejmClient:
    """Fetches the roster, sitting calendar and per-day votes for one term.

    Args:
        base_url: API root (without the term segment).
        term: Sejm term number.
        timeout: Per-request wall-clock timeout in seconds.
        web_base_url: Public website root for voting detail links.
        transport: Optional httpx transport (used by tests).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        term: int = DEFAULT_TERM,
        timeout: float = DEFAULT_TIMEOUT,
        web_base_url: str = DEFAULT_WEB_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._term = term
        self._timeout = timeout
        self._base_url = f"{base_url.rstrip('/')}/term{term}"
        self._web_base_url = web_base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @property
    def provider_name(self) -> str:
        return "sejm"

    @property
    def term(self) -> int:
        return self._term

    async def fetch_mps(self) -> list[Representative]:
        """Fetch every representative of the term."""
        data = await self._request("/MP")
        if not isinstance(data, list):
            raise SejmApiError(self.provider_name, "Unexpected roster payload")
        representatives = [rep for rep in (self._map_mp(item) for item in data) if rep is not None]
        logger.info("Fetched {} representatives for term {}", len(representatives), self._term)
        return representatives

    async def fetch_proceedings(self) -> list[Sitting]:
        """Fetch the chamber's sitting calendar."""
        data = await self._request("/proceedings")
        if not isinstance(data, list):
            raise SejmApiError(self.provider_name, "Unexpected proceedings payload")
        sittings = [s for s in (self._map_sitting(item) for item in data) if s is not None]
        logger.debug("Fetched {} sittings for term {}", len(sittings), self._term)
        return sittings

    async def fetch_votes_for_day(self, mp_id: int, sitting: int, day: date) -> list[VoteRecord]:
        """Fetch one representative's votes on one sitting day."""
        data = await self._request(f"/MP/{mp_id}/votings/{sitting}/{day.isoformat()}")
        if not isinstance(data, list):
            return []
        return [vote for vote in (self._map_vote(item, sitting, day) for item in data) if vote is not None]

    def photo_url(self, mp_id: int) -> str:
        """URL of a representative's thumbnail photo."""
        return f"{self._base_url}/MP/{mp_id}/photo-mini"

    def voting_url(self, sitting: int, voting_number: int) -> str:
        """Public voting-detail page for a sitting and voting number."""
        query = urlencode(
            {
                "symbol": "glosowania",
                "NrKadencji": self._term,
                "NrPosiedzenia": sitting,
                "NrGlosowania": voting_number,
            }
        )
        return f"{self._web_base_url}/Sejm{self._term}.nsf/agent.xsp?{query}"

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _request(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await fetch_json(
            self._client,
            path,
            params=params,
            timeout=self._timeout,
            provider_name=self.provider_name,
        )

    def _map_mp(self, item: Any) -> Representative | None:
        if not isinstance(item, dict):
            return None
        mp_id = item.get("id")
        if not isinstance(mp_id, int):
            logger.warning("Skipping representative without a numeric id: {!r}", mp_id)
            return None
        district = item.get("districtNum")
        return Representative(
            id=mp_id,
            first_name=item.get("firstName") or "",
            last_name=item.get("lastName") or "",
            club=item.get("club") or INDEPENDENT_CLUB,
            district_number=district if isinstance(district, int) else None,
            district_name=item.get("districtName"),
            photo_url=self.photo_url(mp_id),
        )

    @staticmethod
    def _map_sitting(item: Any) -> Sitting | None:
        if not isinstance(item, dict):
            return None
        number = item.get("number", item.get("num"))
        raw_dates = item.get("dates")
        if not number or not isinstance(raw_dates, list):
            return None
        dates: list[date] = []
        for raw in raw_dates:
            parsed = _parse_date(raw)
            if parsed is not None:
                dates.append(parsed)
        if not dates:
            return None
        return Sitting(number=int(number), dates=tuple(dates), title=item.get("title") or "")

    def _map_vote(self, item: Any, sitting: int, day: date) -> VoteRecord | None:
        if not isinstance(item, dict):
            return None
        voting_number = item.get("votingNumber")
        if not isinstance(voting_number, int):
            logger.warning("Skipping vote without a voting number on sitting {} {}", sitting, day)
            return None
        return VoteRecord(
            topic=item.get("title") or item.get("description") or item.get("topic") or DEFAULT_VOTE_TOPIC,
            vote=VoteChoice.from_code(item.get("vote")),
            date=_parse_date(item.get("date")) or day,
            sitting_number=sitting,
            voting_number=voting_number,
            url=self.voting_url(sitting, voting_number),
        )


def _parse_date(raw: Any) -> date | None:
    """Parse an API date or datetime string to a calendar date."""
    if not isinstance(raw, str) or not raw:
        return None
    try:
        return datetime.fromisoformat(raw).date()
    except ValueError:
        return None
