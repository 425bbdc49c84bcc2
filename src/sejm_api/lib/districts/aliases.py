"""Voivodeship alias tables and county-label repair.

Geocoders report regions inconsistently: ISO 3166-2 codes, Polish names
with or without the "województwo" honorific, genitive forms copied from
legal text, and English exonyms. Everything here funnels those variants
into the canonical lowercase Polish name ("dolnośląskie").
"""

import re
from typing import Protocol

from sejm_api.lib.districts.text import normalize

ISO_VOIVODESHIPS: dict[str, str] = {
    "PL-DS": "dolnośląskie",
    "PL-KP": "kujawsko-pomorskie",
    "PL-LU": "lubelskie",
    "PL-LB": "lubuskie",
    "PL-LD": "łódzkie",
    "PL-MA": "małopolskie",
    "PL-MZ": "mazowieckie",
    "PL-OP": "opolskie",
    "PL-PK": "podkarpackie",
    "PL-PD": "podlaskie",
    "PL-PM": "pomorskie",
    "PL-SL": "śląskie",
    "PL-SK": "świętokrzyskie",
    "PL-WN": "warmińsko-mazurskie",
    "PL-WP": "wielkopolskie",
    "PL-ZP": "zachodniopomorskie",
}

# Variant spelling -> canonical name. Keys are matched after normalize().
VOIVODESHIP_ALIASES: dict[str, str] = {
    # dolnośląskie
    "dolnośląskie": "dolnośląskie",
    "dolnośląskiego": "dolnośląskie",
    "lower silesian": "dolnośląskie",
    "lower silesia": "dolnośląskie",
    # kujawsko-pomorskie
    "kujawsko-pomorskie": "kujawsko-pomorskie",
    "kujawsko-pomorskiego": "kujawsko-pomorskie",
    "kuyavian-pomeranian": "kujawsko-pomorskie",
    # lubelskie
    "lubelskie": "lubelskie",
    "lubelskiego": "lubelskie",
    "lublin": "lubelskie",
    # lubuskie
    "lubuskie": "lubuskie",
    "lubuskiego": "lubuskie",
    "lubusz": "lubuskie",
    # łódzkie
    "łódzkie": "łódzkie",
    "łódzkiego": "łódzkie",
    "łódź": "łódzkie",
    # małopolskie
    "małopolskie": "małopolskie",
    "małopolskiego": "małopolskie",
    "lesser poland": "małopolskie",
    # mazowieckie
    "mazowieckie": "mazowieckie",
    "mazowieckiego": "mazowieckie",
    "masovian": "mazowieckie",
    "mazovian": "mazowieckie",
    # opolskie
    "opolskie": "opolskie",
    "opolskiego": "opolskie",
    "opole": "opolskie",
    # podkarpackie
    "podkarpackie": "podkarpackie",
    "podkarpackiego": "podkarpackie",
    "subcarpathian": "podkarpackie",
    # podlaskie
    "podlaskie": "podlaskie",
    "podlaskiego": "podlaskie",
    "podlachian": "podlaskie",
    # pomorskie
    "pomorskie": "pomorskie",
    "pomorskiego": "pomorskie",
    "pomeranian": "pomorskie",
    # śląskie
    "śląskie": "śląskie",
    "śląskiego": "śląskie",
    "silesian": "śląskie",
    # świętokrzyskie
    "świętokrzyskie": "świętokrzyskie",
    "świętokrzyskiego": "świętokrzyskie",
    "holy cross": "świętokrzyskie",
    # warmińsko-mazurskie
    "warmińsko-mazurskie": "warmińsko-mazurskie",
    "warmińsko-mazurskiego": "warmińsko-mazurskie",
    "warmian-masurian": "warmińsko-mazurskie",
    # wielkopolskie
    "wielkopolskie": "wielkopolskie",
    "wielkopolskiego": "wielkopolskie",
    "greater poland": "wielkopolskie",
    # zachodniopomorskie
    "zachodniopomorskie": "zachodniopomorskie",
    "zachodniopomorskiego": "zachodniopomorskie",
    "west pomeranian": "zachodniopomorskie",
}

_ALIAS_INDEX: dict[str, str] = {normalize(alias): canon for alias, canon in VOIVODESHIP_ALIASES.items()}

_HONORIFIC_PREFIX_RE = re.compile(r"^wojew[oó]dztw[oa]\s+")
_HONORIFIC_SUFFIX_RE = re.compile(r"\s+(?:voivodeship|province)$")

# Seat towns the geocoder sometimes reports in place of the adjectival county name
_COUNTY_SEAT_ALIASES: dict[str, str] = {
    "sroda slaska": "powiat średzki",
    "sroda wielkopolska": "powiat średzki",
}

_COUNTY_PREFIX_RE = re.compile(r"^powiat\s+", re.IGNORECASE)
_COUNTY_SUFFIX_RE = re.compile(r"\s*county$")


def voivodeship_from_iso(code: str | None) -> str | None:
    """Map an ISO 3166-2 subdivision code (``PL-MZ``) to its canonical voivodeship."""
    if not code:
        return None
    return ISO_VOIVODESHIPS.get(code.strip().upper())


def canonicalize_voivodeship(raw: str | None) -> str | None:
    """Reduce any voivodeship rendering to its canonical lowercase Polish name.

    Strips the "województwo"/"województwa" prefix and the English
    "Voivodeship" suffix, then consults the alias table. Unknown names are
    returned stripped and lowercased on the assumption that they are
    already canonical.

    Args:
        raw: Region name as reported by a geocoder or legal text.

    Returns:
        Canonical voivodeship name, or None for empty input.
    """
    if not raw:
        return None
    value = str(raw).strip().lower()
    value = _HONORIFIC_PREFIX_RE.sub("", value)
    value = _HONORIFIC_SUFFIX_RE.sub("", value).strip()
    if not value:
        return None
    return _ALIAS_INDEX.get(normalize(value), value)


def fix_county_label(raw: str | None) -> str | None:
    """Repair known geocoder renderings of county names.

    * seat-town names (``"Środa Śląska"``) map to their county label;
    * ``"<name> County"`` becomes ``"powiat <name>"``;
    * a bare adjectival root (``"krośnieński"``) gets the ``"powiat "`` prefix;
    * labels already containing "powiat" or "miasto" are left unchanged.

    This is a heuristic; unmapped output degrades to a best-effort guess.
    """
    if not raw:
        return None
    key = normalize(raw)
    for seat, label in _COUNTY_SEAT_ALIASES.items():
        if seat in key:
            return label
    if key.endswith(" county"):
        return f"powiat {_COUNTY_SUFFIX_RE.sub('', key).strip()}"
    lowered = raw.lower()
    if not _COUNTY_PREFIX_RE.match(lowered) and "miasto" not in lowered:
        return f"powiat {raw.strip()}"
    return raw


def county_key(label: str) -> str:
    """Index key for a county label, with or without its "powiat" prefix."""
    base = _COUNTY_PREFIX_RE.sub("", label.strip())
    return normalize(f"powiat {base}")


class CountyLabelRepair(Protocol):
    """Seam for the county-label repair stage of district resolution."""

    def __call__(self, raw: str | None) -> str | None: ...
