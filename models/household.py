from dataclasses import dataclass
from typing import Optional

from models.recurrence_rule import RecurrenceRule

# Frequency → (pattern, interval_days) for dated charges.
_RULE_BY_FREQUENCY = {
    "weekly": ("weekly", None),
    "biweekly": ("custom-days", 14),
    "monthly": ("monthly", None),
    "yearly": ("yearly", None),
}


@dataclass(frozen=True)
class HouseholdMember:
    id: str
    name: str
    is_active: bool = True


@dataclass(frozen=True)
class HouseholdPayer:
    id: str
    name: str
    type: str = "member"        # 'member' | 'external'

    @property
    def is_external(self) -> bool:
        return self.type == "external"


@dataclass(frozen=True)
class HouseholdCost:
    id: str
    name: str
    amount: float
    start_date: str             # 'YYYY-MM-DD'
    frequency: str = "monthly"  # 'weekly' | 'biweekly' | 'monthly' | 'yearly'
    category: str = "Other"
    subcategory: str = ""
    status: str = "active"      # 'active' | 'inactive'
    is_shared: bool = True
    split_type: str = "equal"   # 'equal' | 'weighted' | 'fixed_amount'
    responsible_member_id: Optional[str] = None
    payer_id: Optional[str] = None
    end_date: Optional[str] = None

    @property
    def rule(self) -> RecurrenceRule:
        pattern, interval = _RULE_BY_FREQUENCY.get(self.frequency, ("monthly", None))
        return RecurrenceRule(
            anchor_date=self.start_date,
            pattern=pattern,
            interval_days=interval,
            end_date=self.end_date,
        )


@dataclass(frozen=True)
class CostSplit:
    cost_id: str
    member_id: str
    share_percent: Optional[float] = None
    share_amount: Optional[float] = None


@dataclass(frozen=True)
class MemberShare:
    member_id: str
    value: float
