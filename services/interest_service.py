import logging
import math

from models.interest import InterestPoint, InterestResult, InterestScenario
from utils.constants import FREQUENCIES, MAX_DURATION_MONTHS
from utils.date_helpers import add_months, require_date, today_str
from utils.errors import InvalidScenarioError

logger = logging.getLogger(__name__)


class InterestService:
    def calculate(self, scenario: InterestScenario, start_date: str | None = None) -> InterestResult:
        """
        Simulate the scenario month by month.

        Returns a timeline with one point per elapsed month plus the month-0
        starting state. ``start_date`` only labels the points with calendar
        dates; it does not influence any amount.
        """
        self._validate(scenario)
        start = start_date or today_str()
        require_date(start)

        advanced = scenario.advanced_enabled
        monthly_rate = scenario.annual_interest_rate / 100 / 12
        yearly_rate = scenario.annual_interest_rate / 100
        tax_multiplier = 1 - scenario.gains_tax_rate / 100 if advanced else 1.0
        inflation = scenario.annual_inflation_rate / 100 if advanced else 0.0
        contribution_growth = scenario.annual_contribution_increase / 100 if advanced else 0.0

        balance = float(scenario.start_capital)
        total_contribution = 0.0
        total_interest = 0.0
        current_contribution = float(scenario.recurring_contribution)

        timeline = [InterestPoint(
            month=0,
            date=start,
            contribution=0.0,
            interest_earned=0.0,
            balance=balance,
            total_contribution=0.0,
            total_interest=0.0,
            real_balance=balance if advanced else None,
        )]

        for month in range(1, scenario.duration_months + 1):
            is_year_start = (month - 1) % 12 == 0
            if month > 1 and is_year_start and contribution_growth != 0:
                current_contribution *= 1 + contribution_growth

            contribution = 0.0
            if scenario.contribution_frequency == "monthly" or is_year_start:
                contribution = current_contribution
            balance += contribution
            total_contribution += contribution

            gross_interest = 0.0
            if scenario.interest_frequency == "monthly":
                gross_interest = balance * monthly_rate
            elif month % 12 == 0:
                gross_interest = balance * yearly_rate

            net_interest = gross_interest * tax_multiplier
            balance += net_interest
            total_interest += net_interest

            real_balance = None
            if advanced:
                real_balance = balance / (1 + inflation) ** (month / 12)

            timeline.append(InterestPoint(
                month=month,
                date=add_months(start, month),
                contribution=contribution,
                interest_earned=net_interest,
                balance=balance,
                total_contribution=total_contribution,
                total_interest=total_interest,
                real_balance=real_balance,
            ))

        last = timeline[-1]
        logger.debug(
            "Interest scenario %r: %d months, end balance %.2f",
            scenario.name, scenario.duration_months, last.balance,
        )
        return InterestResult(
            end_balance=last.balance,
            total_contribution=last.total_contribution,
            total_interest=last.total_interest,
            real_end_balance=last.real_balance,
            timeline=timeline,
        )

    def _validate(self, scenario: InterestScenario):
        numbers = {
            "Start capital": scenario.start_capital,
            "Contribution": scenario.recurring_contribution,
            "Interest rate": scenario.annual_interest_rate,
            "Inflation rate": scenario.annual_inflation_rate,
            "Gains tax rate": scenario.gains_tax_rate,
            "Contribution increase": scenario.annual_contribution_increase,
        }
        for label, value in numbers.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise InvalidScenarioError(f"{label} must be a finite number.")
        if scenario.start_capital < 0:
            raise InvalidScenarioError("Start capital cannot be negative.")
        if scenario.recurring_contribution < 0:
            raise InvalidScenarioError("Contribution cannot be negative.")
        if scenario.annual_interest_rate <= -100:
            raise InvalidScenarioError("Interest rate must be above -100%.")
        if scenario.annual_inflation_rate <= -100:
            raise InvalidScenarioError("Inflation rate must be above -100%.")
        if not 0 <= scenario.gains_tax_rate <= 100:
            raise InvalidScenarioError("Gains tax rate must be between 0 and 100%.")
        if scenario.annual_contribution_increase <= -100:
            raise InvalidScenarioError("Contribution increase must be above -100%.")
        duration = scenario.duration_months
        if isinstance(duration, bool) or not isinstance(duration, int):
            raise InvalidScenarioError("Duration must be a whole number of months.")
        if not 0 <= duration <= MAX_DURATION_MONTHS:
            raise InvalidScenarioError(f"Duration must be between 0 and {MAX_DURATION_MONTHS} months.")
        if scenario.contribution_frequency not in FREQUENCIES:
            raise InvalidScenarioError("Contribution frequency must be monthly or yearly.")
        if scenario.interest_frequency not in FREQUENCIES:
            raise InvalidScenarioError("Interest frequency must be monthly or yearly.")
