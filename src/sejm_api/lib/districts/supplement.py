"""Counties and cities of the four districts that span a whole voivodeship.

The official table describes districts 8, 21, 24 and 33 only as
"województwo X" without enumerating their counties. Resolution needs
county/city granularity to disambiguate geocoder output, so the
membership is completed here.
"""

import dataclasses
from dataclasses import dataclass

from sejm_api.lib.districts.base import DistrictDataError, DistrictDescriptor, DistrictScope
from sejm_api.lib.districts.text import normalize


@dataclass(frozen=True)
class WholeVoivodeshipEntry:
    """Full membership of a voivodeship that forms a single district."""

    district_number: int
    voivodeship: str
    counties: tuple[str, ...]
    cities: tuple[str, ...]


WHOLE_VOIVODESHIP_SUPPLEMENT: tuple[WholeVoivodeshipEntry, ...] = (
    WholeVoivodeshipEntry(
        district_number=8,
        voivodeship="lubuskie",
        counties=(
            "gorzowski",
            "krośnieński",
            "międzyrzecki",
            "nowosolski",
            "słubicki",
            "strzelecko-drezdenecki",
            "sulęciński",
            "świebodziński",
            "wschowski",
            "zielonogórski",
            "żagański",
            "żarski",
        ),
        cities=("Gorzów Wielkopolski", "Zielona Góra"),
    ),
    WholeVoivodeshipEntry(
        district_number=21,
        voivodeship="opolskie",
        counties=(
            "brzeski",
            "głubczycki",
            "kędzierzyńsko-kozielski",
            "kluczborski",
            "krapkowicki",
            "namysłowski",
            "nyski",
            "oleski",
            "opolski",
            "prudnicki",
            "strzelecki",
        ),
        cities=("Opole",),
    ),
    WholeVoivodeshipEntry(
        district_number=24,
        voivodeship="podlaskie",
        counties=(
            "augustowski",
            "białostocki",
            "bielski",
            "grajewski",
            "hajnowski",
            "kolneński",
            "łomżyński",
            "moniecki",
            "sejneński",
            "siemiatycki",
            "sokólski",
            "suwalski",
            "wysokomazowiecki",
            "zambrowski",
        ),
        cities=("Białystok", "Łomża", "Suwałki"),
    ),
    WholeVoivodeshipEntry(
        district_number=33,
        voivodeship="świętokrzyskie",
        counties=(
            "buski",
            "jędrzejowski",
            "kazimierski",
            "kielecki",
            "konecki",
            "opatowski",
            "ostrowiecki",
            "pińczowski",
            "sandomierski",
            "skarżyski",
            "starachowicki",
            "staszowski",
            "włoszczowski",
        ),
        cities=("Kielce",),
    ),
)


def apply_supplement(
    descriptors: list[DistrictDescriptor],
    supplement: tuple[WholeVoivodeshipEntry, ...] = WHOLE_VOIVODESHIP_SUPPLEMENT,
) -> list[DistrictDescriptor]:
    """Fill whole-voivodeship descriptors with their full membership.

    Args:
        descriptors: Descriptors parsed from the official table.
        supplement: Hand-authored whole-voivodeship memberships.

    Returns:
        A new list in the same order with supplemented descriptors replaced.

    Raises:
        DistrictDataError: If an entry names a district that is missing,
            not whole-voivodeship, or lies in a different voivodeship.
    """
    by_number = {d.district_number: d for d in descriptors}
    replacements: dict[int, DistrictDescriptor] = {}
    problems: list[str] = []

    for entry in supplement:
        target = by_number.get(entry.district_number)
        if target is None:
            problems.append(f"district {entry.district_number} not present in the table")
            continue
        if target.scope is not DistrictScope.WHOLE_VOIVODESHIP:
            problems.append(f"district {entry.district_number} is not a whole-voivodeship district")
            continue
        if normalize(target.voivodeship) != normalize(entry.voivodeship):
            problems.append(
                f"district {entry.district_number} covers {target.voivodeship!r}, supplement says {entry.voivodeship!r}"
            )
            continue
        replacements[entry.district_number] = dataclasses.replace(
            target,
            counties=tuple(f"powiat {name}" for name in entry.counties),
            cities=entry.cities,
        )

    if problems:
        raise DistrictDataError("Invalid whole-voivodeship supplement", problems)

    return [replacements.get(d.district_number, d) for d in descriptors]
