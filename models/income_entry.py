from dataclasses import dataclass, field
from typing import Optional

from models.recurrence_rule import RecurrenceRule

# Stored income records name the custom pattern 'custom'.
_PATTERN_BY_RECURRING = {
    "none": "none",
    "weekly": "weekly",
    "monthly": "monthly",
    "custom": "custom-days",
}


@dataclass(frozen=True)
class IncomeEntry:
    id: str
    amount: float
    date: str                   # 'YYYY-MM-DD', anchor of the repeat pattern
    source: str = ""
    recurring: str = "none"     # 'none' | 'weekly' | 'monthly' | 'custom'
    recurring_interval_days: Optional[int] = None
    end_date: Optional[str] = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    notes: str = ""
    created_at: str = ""
    updated_at: str = ""

    @property
    def rule(self) -> RecurrenceRule:
        return RecurrenceRule(
            anchor_date=self.date,
            pattern=_PATTERN_BY_RECURRING.get(self.recurring, self.recurring),
            interval_days=self.recurring_interval_days,
            end_date=self.end_date,
        )
