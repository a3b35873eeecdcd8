from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ShiftJobConfig:
    id: str
    name: str
    hourly_rate: float = 0.0
    employment_type: str = "hourly"         # 'hourly' | 'fixed'
    salary_amount: Optional[float] = None
    fixed_pay_interval: str = "monthly"     # 'monthly' | 'weekly' | 'biweekly'
    start_date: Optional[str] = None
    has_13th_salary: bool = False
    has_14th_salary: bool = False


@dataclass(frozen=True)
class ShiftIncomeResult:
    amount: float
    duration_hours: float
    crosses_midnight: bool
