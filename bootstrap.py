"""Composition root: wires the services together for an embedding application."""
from dataclasses import dataclass

from services.billing_service import BillingCycleResolver
from services.chart_service import ChartService
from services.forecast_service import ForecastService
from services.household_service import HouseholdService
from services.income_service import IncomeService
from services.interest_service import InterestService
from services.recurrence_service import RecurrenceService
from services.reminder_service import ReminderService
from services.shift_service import ShiftIncomeService
from services.subscription_service import SubscriptionService
from utils.app_config import get_log_level
from utils.logging_setup import get_logger, setup_logging

logger = get_logger(__name__)


@dataclass(frozen=True)
class Services:
    recurrence: RecurrenceService
    billing: BillingCycleResolver
    income: IncomeService
    subscriptions: SubscriptionService
    household: HouseholdService
    interest: InterestService
    shifts: ShiftIncomeService
    reminders: ReminderService
    forecast: ForecastService
    charts: ChartService


def build_services() -> Services:
    # ── Calculators ──────────────────────────────────────────────────────────
    recurrence_svc = RecurrenceService()
    billing = BillingCycleResolver()
    interest_svc = InterestService()
    shift_svc = ShiftIncomeService()

    # ── Aggregates ───────────────────────────────────────────────────────────
    income_svc = IncomeService(recurrence_svc)
    subscription_svc = SubscriptionService(billing)
    household_svc = HouseholdService(recurrence_svc)
    reminder_svc = ReminderService(subscription_svc)
    forecast_svc = ForecastService(income_svc, subscription_svc, household_svc)

    return Services(
        recurrence=recurrence_svc,
        billing=billing,
        income=income_svc,
        subscriptions=subscription_svc,
        household=household_svc,
        interest=interest_svc,
        shifts=shift_svc,
        reminders=reminder_svc,
        forecast=forecast_svc,
        charts=ChartService(),
    )


def init_app() -> Services:
    """Configure logging from the user config, then build the services."""
    level = get_log_level()
    setup_logging(level)
    services = build_services()
    logger.info("Services ready (log level %s)", level)
    return services
