import math
import re

from models.shift import ShiftIncomeResult
from utils.constants import MINUTES_PER_DAY
from utils.currency import round_to_cents
from utils.date_helpers import parse_date
from utils.errors import InvalidShiftError

_TIME_PATTERN = re.compile(r"([01]\d|2[0-3]):([0-5]\d)")


class ShiftIncomeService:
    def calculate(self, date: str, start_time: str, end_time: str, hourly_rate: float) -> ShiftIncomeResult:
        """Income for one shift. An end time before the start time runs past midnight."""
        if parse_date(date) is None:
            raise InvalidShiftError("Date must be a valid date in YYYY-MM-DD format.")
        if (
            isinstance(hourly_rate, bool)
            or not isinstance(hourly_rate, (int, float))
            or not math.isfinite(hourly_rate)
            or hourly_rate <= 0
        ):
            raise InvalidShiftError("Hourly rate must be a positive number.")

        start_minutes = self._to_minutes(start_time)
        end_minutes = self._to_minutes(end_time)
        if start_minutes == end_minutes:
            raise InvalidShiftError("Start and end cannot be identical.")

        crosses_midnight = end_minutes < start_minutes
        if crosses_midnight:
            end_minutes += MINUTES_PER_DAY
        duration_hours = (end_minutes - start_minutes) / 60

        return ShiftIncomeResult(
            amount=round_to_cents(duration_hours * hourly_rate),
            duration_hours=duration_hours,
            crosses_midnight=crosses_midnight,
        )

    def _to_minutes(self, value: str) -> int:
        match = _TIME_PATTERN.fullmatch(value) if isinstance(value, str) else None
        if not match:
            raise InvalidShiftError("Time must be in HH:MM format.")
        return int(match.group(1)) * 60 + int(match.group(2))
