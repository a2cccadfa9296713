"""Tests for percentage and unit conversions."""

import pytest

from slicer_profile_converter.units import (
    format_number,
    is_percent,
    millimeter_to_percent,
    percent_to_fraction,
    percent_to_millimeter,
    strip_percent,
)


class TestPercentHelpers:
    def test_is_percent(self):
        assert is_percent("50%")
        assert is_percent(" 50% ")
        assert not is_percent("0.5")
        assert not is_percent(None)

    def test_strip_percent(self):
        assert strip_percent("50%") == "50"
        assert strip_percent("0.5") == "0.5"

    def test_format_number(self):
        assert format_number(2.0) == "2"
        assert format_number(0.25) == "0.25"


class TestPercentToFraction:
    @pytest.mark.parametrize("value,expected", [
        ("150%", "1.5"),
        ("100%", "1"),
        ("95%", "0.95"),
        ("200%", "2"),
    ])
    def test_converts(self, value, expected):
        assert percent_to_fraction(value) == expected

    def test_clamps_above_two(self):
        assert percent_to_fraction("250%") == "2"
        assert percent_to_fraction("1000%") == "2"

    def test_non_percent_passes_through(self):
        assert percent_to_fraction("1.2") == "1.2"

    def test_malformed_percent(self):
        assert percent_to_fraction("abc%") is None


class TestPercentToMillimeter:
    def test_percent_of_nozzle(self):
        assert percent_to_millimeter("0.4", "50%") == "0.2"
        assert percent_to_millimeter("60", "50%") == "30"

    def test_absolute_value_passes_through(self):
        assert percent_to_millimeter("0.4", "0.3") == "0.3"

    def test_missing_value(self):
        assert percent_to_millimeter("0.4", None) is None
        assert percent_to_millimeter("0.4", "") is None

    def test_unusable_comparator(self):
        assert percent_to_millimeter(None, "50%") is None
        assert percent_to_millimeter("50%", "50%") is None
        assert percent_to_millimeter("abc", "50%") is None

    def test_malformed_percent(self):
        assert percent_to_millimeter("0.4", "x%") is None


class TestMillimeterToPercent:
    def test_converts_with_two_decimals(self):
        assert millimeter_to_percent("0.4", "0.4") == "100.00%"
        assert millimeter_to_percent("0.4", "0.2") == "50.00%"

    def test_percent_passes_through(self):
        assert millimeter_to_percent("0.4", "40%") == "40%"

    def test_unusable_comparator(self):
        assert millimeter_to_percent(None, "1") is None
        assert millimeter_to_percent("0", "1") is None
        assert millimeter_to_percent("50%", "1") is None

    def test_non_numeric_value(self):
        assert millimeter_to_percent("0.4", "abc") is None

    @pytest.mark.parametrize("mm", ["0.13", "0.2", "0.37", "1"])
    def test_round_trip_through_percent(self, mm):
        percent = millimeter_to_percent("0.4", mm)
        assert float(percent_to_millimeter("0.4", percent)) == pytest.approx(float(mm), abs=0.01)
