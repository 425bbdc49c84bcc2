"""Domain types for Sejm representatives, sittings and votes."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

# Club label for representatives the API lists without a club
INDEPENDENT_CLUB = "niezrzeszony"

DEFAULT_VOTE_TOPIC = "Głosowanie"


class VoteChoice(StrEnum):
    """How a representative voted, as coded by the Sejm API."""

    YES = "YES"
    NO = "NO"
    ABSTAIN = "ABSTAIN"
    ABSENT = "ABSENT"

    @property
    def label(self) -> str:
        """Polish label shown to citizens."""
        return _VOTE_LABELS[self]

    @classmethod
    def from_code(cls, code: str | None) -> "VoteChoice":
        """Map a source vote code; anything unrecognized counts as absent."""
        if code is None:
            return cls.ABSENT
        try:
            return cls(str(code).strip().upper())
        except ValueError:
            return cls.ABSENT


_VOTE_LABELS: dict[VoteChoice, str] = {
    VoteChoice.YES: "ZA",
    VoteChoice.NO: "PRZECIW",
    VoteChoice.ABSTAIN: "WSTRZYMAŁ SIĘ",
    VoteChoice.ABSENT: "NIEOBECNY",
}


@dataclass(frozen=True)
class Representative:
    """A member of the Sejm (poseł) for the configured term."""

    id: int
    first_name: str
    last_name: str
    club: str = INDEPENDENT_CLUB
    district_number: int | None = None
    district_name: str | None = None
    photo_url: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Sitting:
    """A Sejm sitting (posiedzenie) and the days it met."""

    number: int
    dates: tuple[date, ...]
    title: str = ""


@dataclass(frozen=True)
class VoteRecord:
    """One representative's vote in one chamber voting.

    Identity is ``(sitting_number, voting_number)``.
    """

    topic: str
    vote: VoteChoice
    date: date
    sitting_number: int
    voting_number: int
    url: str | None = None

    @property
    def key(self) -> tuple[int, int]:
        return (self.sitting_number, self.voting_number)

    @property
    def vote_label(self) -> str:
        return self.vote.label


class SejmApiError(Exception):
    """Raised when the Sejm API experiences a transport or service error.

    Args:
        provider_name: Name of the failing data source.
        message: Human-readable error description.
        status_code: Optional HTTP status code from the API.
    """

    def __init__(self, provider_name: str, message: str, status_code: int | None = None) -> None:
        self.provider_name = provider_name
        self.message = message
        self.status_code = status_code
        super().__init__(f"{provider_name}: {message}")
