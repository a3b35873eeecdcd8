import logging

from models.snapshot import ProfileSnapshot
from services.household_service import HouseholdService
from services.income_service import IncomeService
from services.subscription_service import SubscriptionService
from utils.constants import BILLED_STATUSES
from utils.date_helpers import (
    add_days, add_months, difference_in_days, end_of_month, month_key,
    start_of_month, subtract_days, today_str,
)

logger = logging.getLogger(__name__)


class ForecastService:
    def __init__(
        self,
        income_svc: IncomeService,
        subscription_svc: SubscriptionService,
        household_svc: HouseholdService,
    ):
        self._income = income_svc
        self._subscriptions = subscription_svc
        self._household = household_svc

    def get_overview(self, snapshot: ProfileSnapshot, today: str | None = None) -> dict:
        """Headline figures for the current month."""
        ref = today or today_str()
        month_income = self._income.materialize_for_range(
            snapshot.income_entries, start_of_month(ref), end_of_month(ref)
        )
        last_year = self._income.materialize_for_range(snapshot.income_entries, add_days(ref, -365), ref)
        return {
            "monthly_subscriptions": self._subscriptions.monthly_total(snapshot.subscriptions),
            "month_income": self._income.sum_income(month_income),
            "income_mom_change": self._income.month_over_month_change(last_year),
            "top_subscriptions": self._subscriptions.top_subscriptions(snapshot.subscriptions, 3),
            "subscription_trend": self._subscriptions.monthly_trend(snapshot.subscriptions, 6, ref),
            "household_resident_total": self._household.resident_net_total(
                snapshot.household_costs, snapshot.household_payers, ref
            ),
        }

    def get_range_summary(self, snapshot: ProfileSnapshot, range_start: str, range_end: str) -> dict:
        """
        Income and estimated subscription spend for a date range, compared with
        the equally long range right before it.
        """
        range_days = max(1, difference_in_days(range_start, range_end))
        previous_start = subtract_days(range_start, range_days)
        previous_end = subtract_days(range_end, range_days)

        income = self._income.materialize_for_range(snapshot.income_entries, range_start, range_end)
        previous_income = self._income.materialize_for_range(snapshot.income_entries, previous_start, previous_end)
        income_total = self._income.sum_income(income)
        previous_total = self._income.sum_income(previous_income)
        income_delta = 0.0 if previous_total == 0 else (income_total - previous_total) / previous_total * 100

        billed = [s for s in snapshot.subscriptions if s.status in BILLED_STATUSES]
        monthly_spend = self._subscriptions.monthly_total(billed)
        estimated_spend = monthly_spend * max(1.0, range_days / 30)

        return {
            "income_total": income_total,
            "previous_range": (previous_start, previous_end),
            "income_delta": income_delta,
            "monthly_spend": monthly_spend,
            "estimated_spend": estimated_spend,
            "cashflow": income_total - estimated_spend,
            "monthly_income": self._income.income_by_month(income),
            "sources": self._income.source_breakdown(income),
            "categories": self._subscriptions.category_breakdown(billed),
        }

    def get_monthly_forecast(self, snapshot: ProfileSnapshot, today: str | None = None, months: int = 12) -> list[dict]:
        """
        [{month:'YYYY-MM', income:float, expense:float, net:float}]
        from the current month onwards. Expenses are subscription and resident
        household costs as monthly equivalents.
        """
        first = start_of_month(today or today_str())
        subscription_expense = self._subscriptions.monthly_total(snapshot.subscriptions)

        result = []
        for offset in range(months):
            month_start = add_months(first, offset)
            occurrences = self._income.materialize_for_range(
                snapshot.income_entries, month_start, end_of_month(month_start)
            )
            income = self._income.sum_income(occurrences)
            expense = subscription_expense + self._household.resident_net_total(
                snapshot.household_costs, snapshot.household_payers, month_start
            )
            result.append({
                "month": month_key(month_start),
                "income": income,
                "expense": expense,
                "net": income - expense,
            })
        logger.debug("Forecast built for %d months from %s", months, first)
        return result
