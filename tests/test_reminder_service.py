import pytest

from models.subscription import Subscription
from services.billing_service import BillingCycleResolver
from services.reminder_service import ReminderService
from services.subscription_service import SubscriptionService


def _sub(**overrides):
    values = dict(id="1", name="Streaming", amount=12.0, start_date="2025-01-20", category="Entertainment")
    values.update(overrides)
    return Subscription(**values)


@pytest.fixture
def service():
    return ReminderService(SubscriptionService(BillingCycleResolver()))


def test_payment_due_reminder(service):
    reminders = service.get_reminders([_sub()], "2025-03-18", upcoming_days=7)

    assert len(reminders) == 1
    reminder = reminders[0]
    assert reminder.type == "payment_due"
    assert reminder.severity == "info"
    assert reminder.title == "Streaming due in 2 days"
    assert reminder.key == "subscription:1"
    assert reminder.expires_on == "2025-03-20"


def test_cancel_deadline_reminder(service):
    reminders = service.get_reminders([_sub(notice_period_days=14)], "2025-03-05", upcoming_days=7)

    assert [r.type for r in reminders] == ["cancel_deadline"]
    assert reminders[0].title == "Cancel Streaming tomorrow to avoid the next charge"
    assert reminders[0].expires_on == "2025-03-06"


def test_cancel_deadline_passed_reminder(service):
    reminders = service.get_reminders([_sub(notice_period_days=14)], "2025-03-15", upcoming_days=7)

    assert [(r.type, r.severity) for r in reminders] == [("cancel_deadline_passed", "error")]


def test_nothing_outside_window_or_inactive(service):
    subs = [
        _sub(id="far"),
        _sub(id="paused", status="paused", start_date="2025-01-11"),
    ]

    assert service.get_reminders(subs, "2025-03-01", upcoming_days=7) == []


def test_sorted_by_severity_and_dismissable(service):
    subs = [
        _sub(id="info", name="Music", start_date="2025-01-17"),
        _sub(id="late", name="Gym", notice_period_days=30, start_date="2025-01-19"),
    ]

    reminders = service.get_reminders(subs, "2025-03-15", upcoming_days=7)
    assert [r.key for r in reminders] == ["subscription:late", "subscription:info"]

    remaining = service.get_reminders(subs, "2025-03-15", upcoming_days=7, dismissed_keys={"subscription:late"})
    assert [r.key for r in remaining] == ["subscription:info"]


def test_dates_follow_display_pattern(service):
    reminders = service.get_reminders([_sub()], "2025-03-18", upcoming_days=7, date_format="DD.MM.YYYY")

    assert reminders[0].detail.startswith("Due on 20.03.2025")
