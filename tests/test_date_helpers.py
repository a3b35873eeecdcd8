import pytest

from utils.date_helpers import (
    add_days, add_months, compare_date_strings, difference_in_days, end_of_month,
    end_of_year, format_date_by_pattern, friendly_month, is_date_str, month_key,
    parse_date, require_date, start_of_month,
    start_of_year, subtract_days, within_days,
)
from utils.errors import InvalidDateError


def test_add_months_clamps_to_shorter_month():
    assert add_months("2025-01-31", 1) == "2025-02-28"
    assert add_months("2024-01-31", 1) == "2024-02-29"
    assert add_months("2025-03-31", -1) == "2025-02-28"


def test_add_months_crosses_year_boundaries():
    assert add_months("2025-11-15", 3) == "2026-02-15"
    assert add_months("2025-01-15", -13) == "2023-12-15"


def test_add_months_saturates_at_calendar_limits():
    assert add_months("9999-12-31", 1) == "9999-12-31"
    assert add_months("9999-11-15", 3) == "9999-12-31"
    assert add_months("0001-01-15", -1) == "0001-01-01"


def test_add_and_subtract_days():
    assert add_days("2025-02-27", 2) == "2025-03-01"
    assert subtract_days("2025-04-01", 14) == "2025-03-18"


def test_compare_date_strings_is_chronological():
    assert compare_date_strings("2025-01-09", "2025-01-10") == -1
    assert compare_date_strings("2025-12-31", "2025-02-01") == 1
    assert compare_date_strings("2025-05-05", "2025-05-05") == 0


def test_difference_in_days():
    assert difference_in_days("2025-01-15", "2025-01-25") == 10
    assert difference_in_days("2025-01-25", "2025-01-15") == -10
    assert difference_in_days("2024-02-28", "2024-03-01") == 2


def test_range_boundaries():
    assert start_of_month("2025-02-17") == "2025-02-01"
    assert end_of_month("2025-02-17") == "2025-02-28"
    assert end_of_month("2024-02-17") == "2024-02-29"
    assert start_of_year("2025-08-09") == "2025-01-01"
    assert end_of_year("2025-08-09") == "2025-12-31"
    assert month_key("2025-08-09") == "2025-08"


def test_format_date_by_pattern():
    assert format_date_by_pattern("2025-03-09", "DD.MM.YYYY") == "09.03.2025"
    assert format_date_by_pattern("2025-03-09", "MM/DD/YYYY") == "03/09/2025"
    assert format_date_by_pattern("2025-03-09", "YYYY-MM-DD") == "2025-03-09"


def test_friendly_month_falls_back_to_input():
    assert friendly_month("2026-02") == "Feb 2026"
    assert friendly_month("nonsense") == "nonsense"


def test_within_days():
    assert within_days("2025-03-10", 5, "2025-03-10")
    assert within_days("2025-03-15", 5, "2025-03-10")
    assert not within_days("2025-03-16", 5, "2025-03-10")
    assert not within_days("2025-03-09", 5, "2025-03-10")


@pytest.mark.parametrize("value", ["2025-02-30", "2025-2-03", "20250203", "", None, "2025-13-01", "2025-02-03\n"])
def test_malformed_dates_are_rejected(value):
    assert parse_date(value) is None
    assert not is_date_str(value)
    with pytest.raises(InvalidDateError):
        require_date(value)


def test_arithmetic_on_malformed_date_raises():
    with pytest.raises(InvalidDateError):
        add_months("2025-02-30", 1)
    with pytest.raises(ValueError):
        add_days("yesterday", 1)
