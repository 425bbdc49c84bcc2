"""Unit tests for the whole-voivodeship supplement."""

import pytest

from sejm_api.lib.districts.base import DistrictDataError, DistrictDescriptor, DistrictScope
from sejm_api.lib.districts.supplement import (
    WHOLE_VOIVODESHIP_SUPPLEMENT,
    WholeVoivodeshipEntry,
    apply_supplement,
)


def _whole(number: int, voivodeship: str) -> DistrictDescriptor:
    return DistrictDescriptor(
        district_number=number,
        seat_city="Seat",
        scope=DistrictScope.WHOLE_VOIVODESHIP,
        voivodeship=voivodeship,
        description=f"województwo {voivodeship}",
    )


class TestApplySupplement:
    """Tests for apply_supplement()."""

    def test_fills_membership(self) -> None:
        entry = WholeVoivodeshipEntry(8, "lubuskie", ("żarski", "krośnieński"), ("Zielona Góra",))
        (result,) = apply_supplement([_whole(8, "lubuskie")], supplement=(entry,))
        assert result.counties == ("powiat żarski", "powiat krośnieński")
        assert result.cities == ("Zielona Góra",)
        assert result.scope is DistrictScope.WHOLE_VOIVODESHIP
        assert result.description == "województwo lubuskie"

    def test_leaves_other_descriptors_untouched(self) -> None:
        other = DistrictDescriptor(
            district_number=9,
            seat_city="Łódź",
            scope=DistrictScope.ENUMERATED,
            voivodeship="łódzkie",
            cities=("Łódź",),
        )
        entry = WholeVoivodeshipEntry(8, "lubuskie", ("żarski",), ())
        result = apply_supplement([other, _whole(8, "lubuskie")], supplement=(entry,))
        assert result[0] is other
        assert result[1].counties == ("powiat żarski",)

    def test_missing_district_rejected(self) -> None:
        with pytest.raises(DistrictDataError, match="not present"):
            apply_supplement([], supplement=(WholeVoivodeshipEntry(8, "lubuskie", ("żarski",), ()),))

    def test_voivodeship_mismatch_rejected(self) -> None:
        entry = WholeVoivodeshipEntry(8, "opolskie", ("nyski",), ())
        with pytest.raises(DistrictDataError, match="covers"):
            apply_supplement([_whole(8, "lubuskie")], supplement=(entry,))

    def test_enumerated_target_rejected(self) -> None:
        target = DistrictDescriptor(
            district_number=8,
            seat_city="Zielona Góra",
            scope=DistrictScope.ENUMERATED,
            voivodeship="lubuskie",
            counties=("powiat żarski",),
        )
        with pytest.raises(DistrictDataError, match="not a whole-voivodeship"):
            apply_supplement([target], supplement=(WholeVoivodeshipEntry(8, "lubuskie", ("żarski",), ()),))


class TestPackagedSupplement:
    """Tests for the bundled supplement data."""

    def test_covers_four_districts(self) -> None:
        assert {e.district_number: e.voivodeship for e in WHOLE_VOIVODESHIP_SUPPLEMENT} == {
            8: "lubuskie",
            21: "opolskie",
            24: "podlaskie",
            33: "świętokrzyskie",
        }

    def test_no_duplicate_members(self) -> None:
        for entry in WHOLE_VOIVODESHIP_SUPPLEMENT:
            assert len(set(entry.counties)) == len(entry.counties)
            assert len(set(entry.cities)) == len(entry.cities)
