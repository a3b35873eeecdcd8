from dataclasses import dataclass

from models.subscription import Subscription
from services.subscription_service import SubscriptionService
from utils.constants import DEFAULT_CURRENCY, SEVERITY_ORDER, UPCOMING_PAYMENT_DAYS
from utils.currency import format_money
from utils.date_helpers import difference_in_days, format_date_by_pattern, today_str


@dataclass
class Reminder:
    type: str       # 'payment_due' | 'cancel_deadline' | 'cancel_deadline_passed'
    severity: str   # 'info' | 'warning' | 'error'
    title: str
    detail: str
    key: str = ""   # e.g. "subscription:3"
    expires_on: str = ""


class ReminderService:
    def __init__(self, subscription_service: SubscriptionService):
        self._subscriptions = subscription_service

    def get_reminders(
        self,
        subscriptions: list[Subscription],
        ref_date: str | None = None,
        upcoming_days: int = UPCOMING_PAYMENT_DAYS,
        dismissed_keys: set[str] | None = None,
        date_format: str = "YYYY-MM-DD",
    ) -> list[Reminder]:
        """At most one reminder per active subscription, most urgent first."""
        ref = ref_date or today_str()
        reminders = []
        for s in subscriptions:
            if s.status != "active":
                continue
            reminder = self._check_subscription(s, ref, upcoming_days, date_format)
            if reminder is not None:
                reminders.append(reminder)
        reminders.sort(key=lambda r: SEVERITY_ORDER[r.severity])
        if dismissed_keys:
            reminders = [r for r in reminders if r.key not in dismissed_keys]
        return reminders

    def _check_subscription(self, s: Subscription, ref: str, upcoming_days: int, date_format: str) -> Reminder | None:
        next_payment = self._subscriptions.next_payment_date(s, ref)
        cancel_by = self._subscriptions.cancel_by_date(s, ref)
        days_to_payment = difference_in_days(ref, next_payment)
        days_to_cancel = difference_in_days(ref, cancel_by)
        payment_soon = 0 <= days_to_payment <= upcoming_days

        amount = format_money(s.amount, s.currency or DEFAULT_CURRENCY)
        shown_payment = format_date_by_pattern(next_payment, date_format)
        key = f"subscription:{s.id}"

        if s.notice_period_days > 0 and days_to_cancel < 0 and payment_soon:
            return Reminder(
                type="cancel_deadline_passed",
                severity="error",
                title=f"Too late to cancel {s.name} before the next charge",
                detail=f"Notice was due on {format_date_by_pattern(cancel_by, date_format)} · {amount} on {shown_payment}",
                key=key,
                expires_on=next_payment,
            )
        if s.notice_period_days > 0 and 0 <= days_to_cancel <= upcoming_days:
            return Reminder(
                type="cancel_deadline",
                severity="warning",
                title=f"Cancel {s.name} {_day_label(days_to_cancel)} to avoid the next charge",
                detail=f"Cancel by {format_date_by_pattern(cancel_by, date_format)} · {amount} on {shown_payment}",
                key=key,
                expires_on=cancel_by,
            )
        if not payment_soon:
            return None
        return Reminder(
            type="payment_due",
            severity="info",
            title=f"{s.name} due {_day_label(days_to_payment)}",
            detail=f"Due on {shown_payment} · {amount} · {s.category or s.provider}",
            key=key,
            expires_on=next_payment,
        )


def _day_label(days_away: int) -> str:
    if days_away == 0:
        return "today"
    if days_away == 1:
        return "tomorrow"
    return f"in {days_away} days"
