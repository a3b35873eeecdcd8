import logging
import math

from models.income_entry import IncomeEntry
from models.recurrence_rule import Occurrence
from models.shift import ShiftJobConfig
from services.recurrence_service import RecurrenceService
from utils.constants import (
    ANNUAL_BONUS_INTERVAL_DAYS, FIXED_PAY_INTERVALS, FOURTEENTH_SALARY_MONTH,
    THIRTEENTH_SALARY_MONTH,
)
from utils.currency import median
from utils.date_helpers import is_date_str, month_key, today_str

logger = logging.getLogger(__name__)

# Reverse of IncomeEntry's stored-name mapping.
_RECURRING_BY_PATTERN = {"custom-days": "custom"}


class IncomeService:
    def __init__(self, recurrence_service: RecurrenceService):
        self._recurrence = recurrence_service

    def materialize_for_range(self, entries: list[IncomeEntry], range_start: str, range_end: str) -> list[Occurrence]:
        return self._recurrence.materialize(entries, range_start, range_end)

    def sum_income(self, rows) -> float:
        return sum(r.amount for r in rows)

    def income_by_month(self, rows) -> list[dict]:
        """[{month:'YYYY-MM', value:float}] ascending by month."""
        by_month: dict[str, float] = {}
        for r in rows:
            key = month_key(r.date)
            by_month[key] = by_month.get(key, 0.0) + r.amount
        return [{"month": m, "value": v} for m, v in sorted(by_month.items())]

    def source_breakdown(self, rows, label_for=None) -> list[dict]:
        """Totals per income source, largest first.

        ``rows`` are entries or occurrences; occurrences are labelled by the
        entry they came from.
        """
        if label_for is None:
            label_for = _source_label
        totals: dict[str, float] = {}
        for r in rows:
            label = label_for(r)
            totals[label] = totals.get(label, 0.0) + r.amount
        result = [{"label": k, "value": v} for k, v in totals.items()]
        return sorted(result, key=lambda x: x["value"], reverse=True)

    def month_stats(self, rows) -> dict:
        monthly = self.income_by_month(rows)
        if not monthly:
            return {"average": 0.0, "median": 0.0, "best": None, "worst": None}
        values = [m["value"] for m in monthly]
        ranked = sorted(monthly, key=lambda m: m["value"], reverse=True)
        return {
            "average": sum(values) / len(values),
            "median": median(values),
            "best": ranked[0],
            "worst": ranked[-1],
        }

    def month_over_month_change(self, rows) -> float:
        """Percent change of the latest month against the month before it."""
        monthly = self.income_by_month(rows)
        if len(monthly) < 2:
            return 0.0
        current = monthly[-1]["value"]
        previous = monthly[-2]["value"]
        if previous == 0:
            return 0.0
        return (current - previous) / previous * 100

    def build_fixed_salary_entries(self, jobs: list[ShiftJobConfig], today: str | None = None) -> list[IncomeEntry]:
        """
        Income templates for fixed-salary jobs: the regular pay plus optional
        13th (June) and 14th (November) salaries repeating yearly.
        Jobs without a positive salary are skipped.
        """
        fallback_start = today or today_str()
        generated: list[IncomeEntry] = []
        for job in jobs:
            if job.employment_type != "fixed":
                continue
            salary = job.salary_amount
            if salary is None or not math.isfinite(salary) or salary <= 0:
                continue
            start = job.start_date if is_date_str(job.start_date) else fallback_start
            pattern, interval = FIXED_PAY_INTERVALS.get(job.fixed_pay_interval, FIXED_PAY_INTERVALS["monthly"])
            generated.append(IncomeEntry(
                id=f"job-fixed-{job.id}-base",
                amount=salary,
                date=start,
                source=job.name,
                recurring=_RECURRING_BY_PATTERN.get(pattern, pattern),
                recurring_interval_days=interval,
                tags=("job", "fixed-salary", job.name),
                notes="Auto-generated fixed salary income.",
            ))
            bonuses = [
                (job.has_13th_salary, "13", THIRTEENTH_SALARY_MONTH, "13th-salary"),
                (job.has_14th_salary, "14", FOURTEENTH_SALARY_MONTH, "14th-salary"),
            ]
            for enabled, suffix, month, tag in bonuses:
                if not enabled:
                    continue
                bonus_date = _first_annual_bonus_date(start, month)
                generated.append(IncomeEntry(
                    id=f"job-fixed-{job.id}-{suffix}",
                    amount=salary,
                    date=bonus_date,
                    source=job.name,
                    recurring="custom",
                    recurring_interval_days=ANNUAL_BONUS_INTERVAL_DAYS,
                    tags=("job", "fixed-salary", tag, job.name),
                    notes=f"Auto-generated {tag.replace('-', ' ')}.",
                ))
        logger.debug("Built %d fixed salary entries from %d jobs", len(generated), len(jobs))
        return generated


def _source_label(row) -> str:
    source = getattr(row, "source", "")
    if isinstance(source, IncomeEntry):
        return source.source
    return source


def _first_annual_bonus_date(start: str, month: int) -> str:
    """First ``month``-dated payout on or after ``start``; the day is kept within 1..28."""
    year = int(start[:4])
    day = min(max(int(start[8:10]), 1), 28)
    candidate = f"{year}-{month:02d}-{day:02d}"
    if candidate < start:
        candidate = f"{year + 1}-{month:02d}-{day:02d}"
    return candidate
