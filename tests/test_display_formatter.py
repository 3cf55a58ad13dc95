"""Tests for the display formatter (en_US unless stated otherwise)."""

import math

import pytest

from calculator import config_manager
from calculator.DisplayFormatter import clear_label, format_display, format_number, resolve_locale


@pytest.mark.parametrize("raw, expected", [
    ("0", "0"),
    ("8", "8"),
    ("1000", "1,000"),
    ("1234567.5", "1,234,567.5"),
    ("-1234.25", "-1,234.25"),
    ("0.1234567", "0.123457"),
    ("0.0000004", "0"),
    ("0.0078125", "0.007813"),
    ("-0.0078125", "-0.007813"),
    ("2.5e-7", "0"),
])
def test_grouping_and_rounding(raw, expected):
    assert format_display(raw, locale="en_US", max_fraction_digits=6) == expected


@pytest.mark.parametrize("raw, expected", [
    ("3.40", "3.40"),
    ("3.00", "3.00"),
    ("3.", "3."),
    ("0.50", "0.50"),
    ("1000.10", "1,000.10"),
    ("0.", "0."),
])
def test_typed_trailing_zeros_are_kept(raw, expected):
    assert format_display(raw, locale="en_US", max_fraction_digits=6) == expected


def test_no_spurious_zeros():
    assert format_display("3.45", locale="en_US", max_fraction_digits=6) == "3.45"


@pytest.mark.parametrize("raw, expected", [
    ("inf", "inf"),
    ("-inf", "-inf"),
    ("nan", "nan"),
    ("-", "nan"),
])
def test_degenerate_values_render_as_python_text(raw, expected):
    assert format_display(raw, locale="en_US", max_fraction_digits=6) == expected


def test_numbers_are_accepted():
    assert format_display(8.0, locale="en_US", max_fraction_digits=6) == "8"
    assert format_display(2.5, locale="en_US", max_fraction_digits=6) == "2.5"
    assert format_display(math.inf, locale="en_US", max_fraction_digits=6) == "inf"


def test_german_separators():
    assert format_display("1234.5", locale="de_DE", max_fraction_digits=6) == "1.234,5"


def test_locale_name_with_dash():
    assert format_display("1234.5", locale="en-US", max_fraction_digits=6) == "1,234.5"


def test_max_fraction_digits():
    assert format_display("3.14159", locale="en_US", max_fraction_digits=2) == "3.14"
    assert format_number(1234.0, locale="en_US", max_fraction_digits=0) == "1,234"


def test_huge_values_round_at_the_largest_setting():
    text = format_number(1e300, locale="en_US", max_fraction_digits=12)
    assert text.startswith("1,000,000")
    assert "." not in text


def test_defaults_come_from_settings(isolated_config):
    settings = config_manager.load_setting_value("all")
    settings["max_fraction_digits"] = 3
    config_manager.save_setting(settings)

    assert format_display("1234.56789") == "1,234.568"


def test_empty_locale_uses_system_locale():
    from PySide6.QtCore import QLocale

    assert resolve_locale("") == QLocale.system()


def test_clear_label():
    assert clear_label("0") == "AC"
    assert clear_label("0.") == "C"
    assert clear_label("12") == "C"
