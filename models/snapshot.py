from dataclasses import dataclass, field

from models.household import CostSplit, HouseholdCost, HouseholdMember, HouseholdPayer
from models.income_entry import IncomeEntry
from models.subscription import Subscription


@dataclass(frozen=True)
class ProfileSnapshot:
    """Records of one profile as handed over by the storage layer."""
    subscriptions: list[Subscription] = field(default_factory=list)
    income_entries: list[IncomeEntry] = field(default_factory=list)
    household_members: list[HouseholdMember] = field(default_factory=list)
    household_payers: list[HouseholdPayer] = field(default_factory=list)
    household_costs: list[HouseholdCost] = field(default_factory=list)
    household_splits: list[CostSplit] = field(default_factory=list)
