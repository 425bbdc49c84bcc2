"""District library: Sejm electoral districts and postal-code resolution.

Public API:
    - normalize: Lookup-key normalization
    - canonicalize_voivodeship / voivodeship_from_iso / fix_county_label: Alias tables
    - parse_descriptors / build_indexes / validate_partition: Official table parsing
    - apply_supplement: Whole-voivodeship membership completion
    - load_district_set: Cached, validated DistrictSet
    - DistrictResolver / MatchTier / DistrictMatch: Cascading resolution
"""

from sejm_api.lib.districts.aliases import (
    ISO_VOIVODESHIPS,
    VOIVODESHIP_ALIASES,
    canonicalize_voivodeship,
    county_key,
    fix_county_label,
    voivodeship_from_iso,
)
from sejm_api.lib.districts.base import (
    DISTRICT_COUNT,
    DistrictDataError,
    DistrictDescriptor,
    DistrictScope,
    DistrictSet,
    LookupIndexes,
)
from sejm_api.lib.districts.parser import (
    build_district_set,
    build_indexes,
    load_district_set,
    parse_description,
    parse_descriptors,
    read_packaged_table,
    validate_partition,
)
from sejm_api.lib.districts.resolver import (
    DistrictMatch,
    DistrictResolver,
    MatchTier,
    NormalizedLocation,
    normalize_location,
)
from sejm_api.lib.districts.supplement import WHOLE_VOIVODESHIP_SUPPLEMENT, apply_supplement
from sejm_api.lib.districts.text import collation_key, normalize

__all__ = [
    "DISTRICT_COUNT",
    "ISO_VOIVODESHIPS",
    "VOIVODESHIP_ALIASES",
    "WHOLE_VOIVODESHIP_SUPPLEMENT",
    "DistrictDataError",
    "DistrictDescriptor",
    "DistrictMatch",
    "DistrictResolver",
    "DistrictScope",
    "DistrictSet",
    "LookupIndexes",
    "MatchTier",
    "NormalizedLocation",
    "apply_supplement",
    "build_district_set",
    "build_indexes",
    "canonicalize_voivodeship",
    "collation_key",
    "county_key",
    "fix_county_label",
    "load_district_set",
    "normalize",
    "normalize_location",
    "parse_description",
    "parse_descriptors",
    "read_packaged_table",
    "validate_partition",
    "voivodeship_from_iso",
]
