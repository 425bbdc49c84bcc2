"""Unit tests for voivodeship aliases and county-label repair."""

import pytest

from sejm_api.lib.districts.aliases import (
    ISO_VOIVODESHIPS,
    VOIVODESHIP_ALIASES,
    canonicalize_voivodeship,
    county_key,
    fix_county_label,
    voivodeship_from_iso,
)


class TestVoivodeshipFromIso:
    """Tests for ISO 3166-2 code lookup."""

    def test_known_code(self) -> None:
        assert voivodeship_from_iso("PL-MZ") == "mazowieckie"
        assert voivodeship_from_iso(" pl-ld ") == "łódzkie"

    def test_unknown_or_missing(self) -> None:
        assert voivodeship_from_iso("DE-BE") is None
        assert voivodeship_from_iso(None) is None
        assert voivodeship_from_iso("") is None

    def test_covers_sixteen_voivodeships(self) -> None:
        assert len(ISO_VOIVODESHIPS) == 16
        assert len(set(ISO_VOIVODESHIPS.values())) == 16


class TestCanonicalizeVoivodeship:
    """Tests for canonicalize_voivodeship()."""

    @pytest.mark.parametrize("code", sorted(ISO_VOIVODESHIPS))
    def test_every_alias_agrees_with_iso(self, code: str) -> None:
        canonical = voivodeship_from_iso(code)
        aliases = [alias for alias, target in VOIVODESHIP_ALIASES.items() if target == canonical]
        assert aliases
        for alias in aliases:
            assert canonicalize_voivodeship(alias) == canonical

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("województwo mazowieckie", "mazowieckie"),
            ("Województwo Łódzkie", "łódzkie"),
            ("wojewodztwa dolnoslaskiego", "dolnośląskie"),
            ("Lower Silesian Voivodeship", "dolnośląskie"),
            ("Masovian Voivodeship", "mazowieckie"),
            ("Opole Province", "opolskie"),
            ("swietokrzyskie", "świętokrzyskie"),
            ("Kujawsko Pomorskie", "kujawsko-pomorskie"),
        ],
    )
    def test_variants(self, raw: str, expected: str) -> None:
        assert canonicalize_voivodeship(raw) == expected

    def test_unknown_passes_through_lowercased(self) -> None:
        assert canonicalize_voivodeship("  Atlantis ") == "atlantis"

    def test_empty(self) -> None:
        assert canonicalize_voivodeship(None) is None
        assert canonicalize_voivodeship("   ") is None


class TestFixCountyLabel:
    """Tests for fix_county_label()."""

    def test_bare_adjective_gets_prefix(self) -> None:
        assert fix_county_label("krośnieński") == "powiat krośnieński"

    def test_english_county_suffix(self) -> None:
        assert fix_county_label("Krosno County") == "powiat krosno"

    def test_seat_town_alias(self) -> None:
        assert fix_county_label("Środa Śląska") == "powiat średzki"
        assert fix_county_label("powiat średzki (Środa Wielkopolska)") == "powiat średzki"

    def test_existing_labels_unchanged(self) -> None:
        assert fix_county_label("powiat legnicki") == "powiat legnicki"
        assert fix_county_label("miasto Kraków") == "miasto Kraków"

    def test_empty(self) -> None:
        assert fix_county_label(None) is None
        assert fix_county_label("") is None


class TestCountyKey:
    """Tests for county_key()."""

    def test_prefix_optional(self) -> None:
        assert county_key("powiat Łódzki Wschodni") == county_key("łódzki wschodni") == "powiat lodzki wschodni"
