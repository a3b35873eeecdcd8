from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class RecurrenceRule:
    anchor_date: str                     # 'YYYY-MM-DD'
    pattern: str = "none"                # 'none' | 'weekly' | 'monthly' | 'yearly' | 'custom-days'
    interval_days: Optional[int] = None  # required > 0 for 'custom-days'
    end_date: Optional[str] = None

    @property
    def is_recurring(self) -> bool:
        return self.pattern != "none"


@dataclass(frozen=True)
class Occurrence:
    source_id: str
    date: str               # 'YYYY-MM-DD'
    amount: float
    source: Any = None      # the record the rule came from

    @property
    def id(self) -> str:
        return f"{self.source_id}::{self.date}"
