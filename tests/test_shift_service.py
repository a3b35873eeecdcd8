import math

import pytest

from services.shift_service import ShiftIncomeService
from utils.errors import InvalidShiftError


@pytest.fixture
def service():
    return ShiftIncomeService()


def test_same_day_shift(service):
    result = service.calculate("2026-02-20", "08:00", "12:30", 18)

    assert result.duration_hours == 4.5
    assert result.amount == 81
    assert result.crosses_midnight is False


def test_overnight_shift(service):
    result = service.calculate("2026-02-20", "22:00", "02:00", 18)

    assert result.duration_hours == 4
    assert result.amount == 72
    assert result.crosses_midnight is True


def test_amount_is_rounded_to_cents(service):
    result = service.calculate("2026-02-20", "09:00", "09:20", 12.35)

    assert result.amount == 4.12


def test_identical_times_are_rejected(service):
    with pytest.raises(InvalidShiftError, match="identical"):
        service.calculate("2026-02-20", "10:00", "10:00", 18)


@pytest.mark.parametrize(
    "start,end",
    [("8:00", "12:00"), ("24:00", "02:00"), ("08:60", "09:00"), ("08:00", "noon"),
     ("08:00\n", "12:00"), ("08:00", "12:00\n")],
)
def test_malformed_times_are_rejected(service, start, end):
    with pytest.raises(InvalidShiftError, match="HH:MM"):
        service.calculate("2026-02-20", start, end, 18)


@pytest.mark.parametrize("date", ["2026-02-30", "20.02.2026", ""])
def test_invalid_dates_are_rejected(service, date):
    with pytest.raises(InvalidShiftError, match="date"):
        service.calculate(date, "08:00", "12:00", 18)


@pytest.mark.parametrize("rate", [0, -10, math.nan, math.inf])
def test_rate_must_be_positive_and_finite(service, rate):
    with pytest.raises(InvalidShiftError, match="rate"):
        service.calculate("2026-02-20", "08:00", "12:00", rate)
