import logging
from datetime import date, timedelta

from models.subscription import BillingCycle
from utils.constants import BILLING_CYCLE_GUARD, FOUR_WEEKLY_DAYS, SUBSCRIPTION_INTERVALS
from utils.date_helpers import format_date, parse_date, require_date, shift_months, today_str
from utils.errors import InvalidRuleError

logger = logging.getLogger(__name__)


class BillingCycleResolver:
    """Next due date and cancellation deadline of a subscription's billing cycle.

    Always recomputed from ``today``; a stored ``next_payment_override`` wins
    over anything derived from the cycle.
    """

    def next_payment_date(self, cycle: BillingCycle, today: str | None = None) -> str:
        if cycle.next_payment_override:
            return cycle.next_payment_override

        ref = require_date(today or today_str())
        start = parse_date(cycle.start_date)
        if start is None:
            raise InvalidRuleError(f"Invalid subscription start date {cycle.start_date!r}.")

        if cycle.interval == "four-weekly":
            return format_date(self._next_by_days(start, FOUR_WEEKLY_DAYS, ref))
        return format_date(self._next_by_months(start, self.interval_months(cycle), ref))

    def cancel_by_date(self, cycle: BillingCycle, today: str | None = None) -> str:
        """Last day to give notice before the next charge. May already be in the past."""
        next_payment = require_date(self.next_payment_date(cycle, today))
        return format_date(next_payment - timedelta(days=cycle.notice_period_days))

    def interval_months(self, cycle: BillingCycle) -> int:
        if cycle.interval == "monthly":
            return 1
        if cycle.interval == "yearly":
            return 12
        if cycle.interval == "custom-months":
            months = cycle.custom_interval_months
            return months if months and months > 0 else 1
        if cycle.interval not in SUBSCRIPTION_INTERVALS:
            raise InvalidRuleError(f"Unknown billing interval {cycle.interval!r}.")
        raise InvalidRuleError(f"Interval {cycle.interval!r} is not month based.")

    def _next_by_months(self, start: date, months: int, ref: date) -> date:
        candidate = start
        steps = 0
        while candidate < ref and steps < BILLING_CYCLE_GUARD:
            steps += 1
            candidate = shift_months(start, steps * months)
        if candidate < ref:
            logger.warning("Billing cycle from %s not caught up after %d steps", start, steps)
        return candidate

    def _next_by_days(self, start: date, days: int, ref: date) -> date:
        candidate = start
        steps = 0
        while candidate < ref and steps < BILLING_CYCLE_GUARD:
            steps += 1
            candidate = start + timedelta(days=steps * days)
        if candidate < ref:
            logger.warning("Billing cycle from %s not caught up after %d steps", start, steps)
        return candidate
