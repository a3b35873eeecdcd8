from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class BillingCycle:
    start_date: str                             # 'YYYY-MM-DD'
    interval: str = "monthly"                   # 'monthly' | 'yearly' | 'four-weekly' | 'custom-months'
    custom_interval_months: Optional[int] = None
    next_payment_override: Optional[str] = None
    notice_period_days: int = 0
    end_date: Optional[str] = None


@dataclass(frozen=True)
class Subscription:
    id: str
    name: str
    amount: float
    start_date: str                             # 'YYYY-MM-DD'
    interval: str = "monthly"
    status: str = "active"                      # 'active' | 'paused' | 'cancelled'
    category: str = ""
    provider: str = ""
    notice_period_days: int = 0
    custom_interval_months: Optional[int] = None
    next_payment_override: Optional[str] = None
    end_date: Optional[str] = None
    currency: Optional[str] = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    notes: str = ""
    link: str = ""

    @property
    def billing_cycle(self) -> BillingCycle:
        return BillingCycle(
            start_date=self.start_date,
            interval=self.interval,
            custom_interval_months=self.custom_interval_months,
            next_payment_override=self.next_payment_override,
            notice_period_days=self.notice_period_days,
            end_date=self.end_date,
        )
