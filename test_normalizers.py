"""
Tests for key normalization, numeric parsing and request validators
"""
import pytest

from kisan_schemes.utils import (
    is_blank,
    normalize_farmer_input,
    normalize_key,
    parse_numeric,
    validate_farmer_input,
    validate_profile_name
)


class TestNormalizeKey:

    def test_spacing_and_case_variants_share_a_key(self):
        assert normalize_key("Land  Size") == normalize_key("land_size") == normalize_key(" LAND SIZE ")
        assert normalize_key("  Land   Size ") == "land_size"

    def test_is_idempotent(self):
        for key in ["Land Size", "Annual Income (Max)", "  PM-KISAN   Registration", "already_normal"]:
            once = normalize_key(key)
            assert normalize_key(once) == once

    def test_tabs_and_newlines_collapse(self):
        assert normalize_key("Farmer\tCategory\n") == "farmer_category"

    def test_non_string_keys(self):
        assert normalize_key(2024) == "2024"


class TestNormalizeFarmerInput:

    def test_returns_normalized_copy(self):
        raw = {"Land Size": "2", "Farmer Category": "BPL"}
        normalized = normalize_farmer_input(raw)

        assert normalized == {"land_size": "2", "farmer_category": "BPL"}
        assert raw == {"Land Size": "2", "Farmer Category": "BPL"}

    def test_later_duplicate_wins(self):
        normalized = normalize_farmer_input({"Land Size": "1", "land_size": "3"})
        assert normalized == {"land_size": "3"}


class TestParseNumeric:

    @pytest.mark.parametrize("value,expected", [
        ("₹1,200", 1200),
        (" 3.5 ", 3.5),
        ("-4", -4),
        ("1,50,000", 150000),
        ("0", 0),
        (7, 7),
        (2.25, 2.25),
        (0, 0),
    ])
    def test_numbers(self, value, expected):
        assert parse_numeric(value) == expected

    @pytest.mark.parametrize("value", ["", None, "abc", "₹", "12 acres", "1_000", "nan", "inf", True, float("nan")])
    def test_not_a_number(self, value):
        assert parse_numeric(value) is None

    def test_zero_is_not_the_sentinel(self):
        assert parse_numeric("0") is not None


def test_is_blank():
    assert is_blank(None)
    assert is_blank("")
    assert is_blank("   ")
    assert not is_blank(0)
    assert not is_blank("no")


class TestValidators:

    def test_profile_name(self):
        assert validate_profile_name("Kharif 2024")
        assert not validate_profile_name("")
        assert not validate_profile_name("   ")
        assert not validate_profile_name("x" * 101)
        assert validate_profile_name("  " + "x" * 100 + "  ")

    def test_farmer_input_accepts_scalars(self):
        assert validate_farmer_input({"land_size": 2, "category": "BPL", "irrigated": True, "age": None}) == []

    def test_farmer_input_rejects_nested_values(self):
        errors = validate_farmer_input({"land_size": {"value": 2}, "crops": ["rice"]})
        assert len(errors) == 2

    def test_farmer_input_must_be_a_mapping(self):
        assert validate_farmer_input(["land_size"]) != []
