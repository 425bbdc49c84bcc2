"""Parser for the official Sejm district table and index builder.

The table is the National Electoral Commission's semicolon-delimited
listing of districts. Its last column is a free-text boundary description,
e.g.::

    część województwa dolnośląskiego obejmująca obszary powiatów:
    dzierżoniowski, kłodzki oraz miasta na prawach powiatu: Wałbrzych

Descriptions are parsed once, completed with the whole-voivodeship
supplement, validated, and frozen into a ``DistrictSet``.
"""

import csv
import io
import re
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType

from loguru import logger

from sejm_api.lib.districts.aliases import canonicalize_voivodeship, county_key
from sejm_api.lib.districts.base import (
    DISTRICT_COUNT,
    DistrictDataError,
    DistrictDescriptor,
    DistrictScope,
    DistrictSet,
    LookupIndexes,
)
from sejm_api.lib.districts.supplement import apply_supplement
from sejm_api.lib.districts.text import normalize

_PACKAGED_TABLE = "okregi_sejm.csv"

# Column positions in the official table
_COL_NUMBER = 0
_COL_SEATS = 1
_COL_POPULATION = 4
_COL_VOTERS = 5
_COL_SEAT_CITY = 6
_COL_DESCRIPTION = 7

_VOIVODESHIP_RE = re.compile(
    r"wojew[oó]dztw[oa]\s+([a-ząćęłńóśźż\- ]+?)(?:\s+obejm|\s*;|\s*$)",
    re.IGNORECASE,
)
_COUNTIES_RE = re.compile(
    r"obszary?\s+powiat(?:ów|u):\s*(.+?)(?:\s+oraz\s+miast|\s*;|\s*$)",
    re.IGNORECASE | re.DOTALL,
)
_CITIES_RE = re.compile(
    r"miast(?:a)?\s+na\s+prawach\s+powiatu:\s*([^;]+)",
    re.IGNORECASE,
)


def _split_names(raw: str) -> tuple[str, ...]:
    names = (part.strip().rstrip(".").strip() for part in raw.split(","))
    return tuple(name for name in names if name)


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def parse_description(description: str) -> tuple[str | None, tuple[str, ...], tuple[str, ...]]:
    """Extract voivodeship, county labels and cities from a boundary description.

    Either list may be absent without affecting the other.

    Args:
        description: Free-text "Opis granic" column.

    Returns:
        Tuple of (canonical voivodeship or None, county labels, city names).
    """
    text = " ".join(description.split())

    voivodeship_match = _VOIVODESHIP_RE.search(text)
    voivodeship = canonicalize_voivodeship(voivodeship_match.group(1)) if voivodeship_match else None

    counties: tuple[str, ...] = ()
    counties_match = _COUNTIES_RE.search(text)
    if counties_match:
        counties = tuple(f"powiat {name}" for name in _split_names(counties_match.group(1)))

    cities: tuple[str, ...] = ()
    cities_match = _CITIES_RE.search(text)
    if cities_match:
        cities = _split_names(cities_match.group(1))

    return voivodeship, counties, cities


def parse_descriptors(table_text: str) -> list[DistrictDescriptor]:
    """Parse the official district table into descriptors.

    The first row is a header. Rows whose district number is missing or
    non-numeric, or whose description is empty, are skipped.

    Args:
        table_text: Semicolon-delimited table with double-quoted text fields.

    Returns:
        Descriptors in table order.
    """
    reader = csv.reader(io.StringIO(table_text.strip()), delimiter=";", quotechar='"')
    next(reader, None)

    descriptors: list[DistrictDescriptor] = []
    for line_no, row in enumerate(reader, start=2):
        if not row:
            continue
        number = _parse_int(row[_COL_NUMBER])
        description = row[_COL_DESCRIPTION].strip() if len(row) > _COL_DESCRIPTION else ""
        if number is None or not description:
            logger.debug("Skipping district table line {}: no number or description", line_no)
            continue

        voivodeship, counties, cities = parse_description(description)
        scope = DistrictScope.ENUMERATED
        if not counties and not cities and voivodeship:
            scope = DistrictScope.WHOLE_VOIVODESHIP

        descriptors.append(
            DistrictDescriptor(
                district_number=number,
                seat_city=row[_COL_SEAT_CITY].strip() if len(row) > _COL_SEAT_CITY else "",
                scope=scope,
                voivodeship=voivodeship,
                counties=counties,
                cities=cities,
                description=description,
                seats=_parse_int(row[_COL_SEATS]) if len(row) > _COL_SEATS else None,
                population=_parse_int(row[_COL_POPULATION]) if len(row) > _COL_POPULATION else None,
                voters=_parse_int(row[_COL_VOTERS]) if len(row) > _COL_VOTERS else None,
            )
        )

    return descriptors


def validate_partition(descriptors: list[DistrictDescriptor], expected_count: int | None = DISTRICT_COUNT) -> None:
    """Check that the descriptors partition the country.

    Every district must have a voivodeship and a non-empty membership, and
    no county or city may belong to two districts within one voivodeship.
    County names legitimately recur across voivodeships.

    Args:
        descriptors: Supplemented descriptors.
        expected_count: Districts numbered 1..N that must all be present,
            or None to skip the completeness check.

    Raises:
        DistrictDataError: Listing every violation found.
    """
    problems: list[str] = []

    numbers = [d.district_number for d in descriptors]
    duplicates = sorted({n for n in numbers if numbers.count(n) > 1})
    if duplicates:
        problems.append(f"duplicate district numbers {duplicates}")
    if expected_count is not None:
        missing = sorted(set(range(1, expected_count + 1)) - set(numbers))
        if missing:
            problems.append(f"missing districts {missing}")

    county_owner: dict[tuple[str, str], int] = {}
    city_owner: dict[tuple[str, str], int] = {}
    for descriptor in descriptors:
        number = descriptor.district_number
        if not descriptor.voivodeship:
            problems.append(f"district {number} has no voivodeship")
            continue
        if descriptor.is_empty:
            problems.append(f"district {number} has an empty scope")
        voivodeship_key = normalize(descriptor.voivodeship)
        for label in descriptor.counties:
            key = (county_key(label), voivodeship_key)
            owner = county_owner.setdefault(key, number)
            if owner != number:
                problems.append(f"{label!r} ({descriptor.voivodeship}) assigned to districts {owner} and {number}")
        for city in descriptor.cities:
            key = (normalize(city), voivodeship_key)
            owner = city_owner.setdefault(key, number)
            if owner != number:
                problems.append(f"{city!r} ({descriptor.voivodeship}) assigned to districts {owner} and {number}")

    if problems:
        raise DistrictDataError("District table does not partition the country", problems)


def build_indexes(descriptors: list[DistrictDescriptor]) -> LookupIndexes:
    """Build the five lookup indexes.

    Enumerated districts are inserted first and whole-voivodeship districts
    last, so on an unqualified-key collision the supplemented district wins.

    Args:
        descriptors: Validated descriptors.

    Returns:
        Read-only ``LookupIndexes``.
    """
    county_only: dict[str, int] = {}
    city_only: dict[str, int] = {}
    county_voivodeship: dict[tuple[str, str], int] = {}
    city_voivodeship: dict[tuple[str, str], int] = {}
    voivodeship_only: dict[str, int] = {}

    ordered = sorted(
        descriptors,
        key=lambda d: (d.scope is DistrictScope.WHOLE_VOIVODESHIP, d.district_number),
    )
    for descriptor in ordered:
        number = descriptor.district_number
        voivodeship_key = normalize(descriptor.voivodeship) if descriptor.voivodeship else None

        for label in descriptor.counties:
            key = county_key(label)
            previous = county_only.get(key)
            if previous is not None and previous != number:
                logger.debug("Ambiguous county {!r}: district {} replaces {} in bare index", key, number, previous)
            county_only[key] = number
            if voivodeship_key:
                county_voivodeship[(key, voivodeship_key)] = number

        for city in descriptor.cities:
            key = normalize(city)
            city_only[key] = number
            if voivodeship_key:
                city_voivodeship[(key, voivodeship_key)] = number

        if descriptor.scope is DistrictScope.WHOLE_VOIVODESHIP and voivodeship_key:
            voivodeship_only[voivodeship_key] = number

    return LookupIndexes(
        county_only=MappingProxyType(county_only),
        city_only=MappingProxyType(city_only),
        county_voivodeship=MappingProxyType(county_voivodeship),
        city_voivodeship=MappingProxyType(city_voivodeship),
        voivodeship_only=MappingProxyType(voivodeship_only),
    )


def build_district_set(table_text: str, source: str = "packaged") -> DistrictSet:
    """Parse, supplement, validate and index a district table.

    Raises:
        DistrictDataError: If the resulting descriptors do not partition the country.
    """
    descriptors = apply_supplement(parse_descriptors(table_text))
    validate_partition(descriptors)
    indexes = build_indexes(descriptors)
    logger.info(
        "Loaded {} districts from {} ({} counties, {} cities indexed)",
        len(descriptors),
        source,
        len(indexes.county_voivodeship),
        len(indexes.city_voivodeship),
    )
    return DistrictSet(
        descriptors=MappingProxyType({d.district_number: d for d in descriptors}),
        indexes=indexes,
        source=source,
    )


def read_packaged_table() -> str:
    """Return the district table bundled with the package."""
    table = resources.files("sejm_api.lib.districts") / "data" / _PACKAGED_TABLE
    return table.read_text(encoding="utf-8")


@lru_cache(maxsize=4)
def load_district_set(path: str | None = None) -> DistrictSet:
    """Load and cache the district set, from ``path`` or the packaged table.

    The set is built once per path for the life of the process.
    """
    if path:
        return build_district_set(Path(path).read_text(encoding="utf-8"), source=path)
    return build_district_set(read_packaged_table())
