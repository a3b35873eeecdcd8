from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class InterestScenario:
    start_capital: float
    recurring_contribution: float = 0.0
    contribution_frequency: str = "monthly"     # 'monthly' | 'yearly'
    annual_interest_rate: float = 0.0           # percent
    duration_months: int = 12
    interest_frequency: str = "monthly"         # 'monthly' | 'yearly'
    advanced_enabled: bool = False
    annual_inflation_rate: float = 0.0          # percent, advanced only
    gains_tax_rate: float = 0.0                 # percent, advanced only
    annual_contribution_increase: float = 0.0   # percent, advanced only
    name: str = ""


@dataclass(frozen=True)
class InterestPoint:
    month: int
    date: str
    contribution: float
    interest_earned: float
    balance: float
    total_contribution: float
    total_interest: float
    real_balance: Optional[float] = None


@dataclass(frozen=True)
class InterestResult:
    end_balance: float
    total_contribution: float
    total_interest: float
    real_end_balance: Optional[float] = None
    timeline: list[InterestPoint] = field(default_factory=list)
