import logging

from models.subscription import Subscription
from services.billing_service import BillingCycleResolver
from utils.constants import BILLED_STATUSES, TREND_MONTHS, UPCOMING_PAYMENT_DAYS
from utils.date_helpers import add_months, month_key, start_of_month, today_str, within_days

logger = logging.getLogger(__name__)


class SubscriptionService:
    def __init__(self, billing_resolver: BillingCycleResolver):
        self._billing = billing_resolver

    def next_payment_date(self, subscription: Subscription, today: str | None = None) -> str:
        return self._billing.next_payment_date(subscription.billing_cycle, today)

    def cancel_by_date(self, subscription: Subscription, today: str | None = None) -> str:
        return self._billing.cancel_by_date(subscription.billing_cycle, today)

    def monthly_equivalent(self, subscription: Subscription) -> float:
        if subscription.interval == "yearly":
            return subscription.amount / 12
        if subscription.interval == "four-weekly":
            return subscription.amount * 13 / 12
        if subscription.interval == "custom-months":
            return subscription.amount / self._billing.interval_months(subscription.billing_cycle)
        return subscription.amount

    def yearly_equivalent(self, subscription: Subscription) -> float:
        return self.monthly_equivalent(subscription) * 12

    def monthly_total(self, subscriptions: list[Subscription]) -> float:
        """Monthly cost of everything still billed (active and paused)."""
        return sum(self.monthly_equivalent(s) for s in subscriptions if s.status in BILLED_STATUSES)

    def yearly_total(self, subscriptions: list[Subscription]) -> float:
        return self.monthly_total(subscriptions) * 12

    def upcoming_payments(
        self,
        subscriptions: list[Subscription],
        range_days: int = UPCOMING_PAYMENT_DAYS,
        today: str | None = None,
    ) -> list[tuple[Subscription, str]]:
        """[(subscription, next_payment_date)] for active ones due within ``range_days``, soonest first."""
        ref = today or today_str()
        result = []
        for s in subscriptions:
            if s.status != "active":
                continue
            next_date = self.next_payment_date(s, ref)
            if within_days(next_date, range_days, ref):
                result.append((s, next_date))
        return sorted(result, key=lambda pair: pair[1])

    def monthly_trend(
        self,
        subscriptions: list[Subscription],
        months_back: int = TREND_MONTHS,
        today: str | None = None,
    ) -> list[dict]:
        """
        [{month:'YYYY-MM', value:float}] of monthly cost, oldest first.

        A subscription counts for a month from its start month through its
        end month. Cancelled ones only count when they carry an end date.
        """
        current = start_of_month(today or today_str())
        points = []
        for offset in range(months_back - 1, -1, -1):
            key = month_key(add_months(current, -offset))
            value = sum(
                self.monthly_equivalent(s) for s in subscriptions
                if self._counts_for_month(s, key)
            )
            points.append({"month": key, "value": value})
        return points

    def top_subscriptions(self, subscriptions: list[Subscription], limit: int = 5) -> list[Subscription]:
        billed = [s for s in subscriptions if s.status in BILLED_STATUSES]
        return sorted(billed, key=self.monthly_equivalent, reverse=True)[:limit]

    def category_breakdown(self, subscriptions: list[Subscription]) -> list[dict]:
        totals: dict[str, float] = {}
        for s in subscriptions:
            if s.status not in BILLED_STATUSES:
                continue
            totals[s.category] = totals.get(s.category, 0.0) + self.monthly_equivalent(s)
        rows = [{"label": k, "value": v} for k, v in totals.items()]
        return sorted(rows, key=lambda r: r["value"], reverse=True)

    def _counts_for_month(self, subscription: Subscription, key: str) -> bool:
        if subscription.status not in BILLED_STATUSES and not subscription.end_date:
            return False
        if month_key(subscription.start_date) > key:
            return False
        if subscription.end_date and month_key(subscription.end_date) < key:
            return False
        return True
