import logging

from models.household import CostSplit, HouseholdCost, HouseholdMember, HouseholdPayer, MemberShare
from models.recurrence_rule import Occurrence
from services.recurrence_service import RecurrenceService
from utils.constants import HOUSEHOLD_MONTHLY_FACTORS, SPLIT_TYPES
from utils.date_helpers import add_months, end_of_month, month_key, start_of_month, today_str
from utils.errors import InvalidRuleError

logger = logging.getLogger(__name__)


class HouseholdService:
    def __init__(self, recurrence_service: RecurrenceService):
        self._recurrence = recurrence_service

    # ── Monthly totals ────────────────────────────────────────────────────────

    def monthly_equivalent(self, cost: HouseholdCost) -> float:
        return cost.amount * HOUSEHOLD_MONTHLY_FACTORS.get(cost.frequency, 1.0)

    def is_relevant_for_month(self, cost: HouseholdCost, month_start: str) -> bool:
        """Active and overlapping the calendar month containing ``month_start``."""
        if cost.status != "active":
            return False
        if cost.start_date > end_of_month(month_start):
            return False
        if cost.end_date and cost.end_date < start_of_month(month_start):
            return False
        return True

    def monthly_total(self, costs: list[HouseholdCost], month_start: str | None = None) -> float:
        month_start = month_start or today_str()
        return sum(
            self.monthly_equivalent(c) for c in costs
            if self.is_relevant_for_month(c, month_start)
        )

    def external_payer_total(
        self,
        costs: list[HouseholdCost],
        payers: list[HouseholdPayer],
        month_start: str | None = None,
    ) -> float:
        month_start = month_start or today_str()
        external_ids = self._external_payer_ids(payers)
        return sum(
            self.monthly_equivalent(c) for c in costs
            if self.is_relevant_for_month(c, month_start) and c.payer_id in external_ids
        )

    def resident_net_total(
        self,
        costs: list[HouseholdCost],
        payers: list[HouseholdPayer],
        month_start: str | None = None,
    ) -> float:
        """What the household itself pays once external payers are taken out."""
        month_start = month_start or today_str()
        total = self.monthly_total(costs, month_start)
        return max(0.0, total - self.external_payer_total(costs, payers, month_start))

    def category_breakdown(self, costs: list[HouseholdCost], month_start: str | None = None) -> list[dict]:
        month_start = month_start or today_str()
        by_category: dict[str, float] = {}
        for cost in costs:
            if not self.is_relevant_for_month(cost, month_start):
                continue
            by_category[cost.category] = by_category.get(cost.category, 0.0) + self.monthly_equivalent(cost)
        rows = [{"label": label, "value": value} for label, value in by_category.items()]
        return sorted(rows, key=lambda r: r["value"], reverse=True)

    def trend(self, costs: list[HouseholdCost], months: int = 12, reference_date: str | None = None) -> list[dict]:
        """[{month:'YYYY-MM', value:float}] for the last ``months`` months, oldest first."""
        current_month_start = start_of_month(reference_date or today_str())
        points = []
        for offset in range(months - 1, -1, -1):
            month_start = add_months(current_month_start, -offset)
            points.append({
                "month": month_key(month_start),
                "value": self.monthly_total(costs, month_start),
            })
        return points

    def cost_occurrences(self, costs: list[HouseholdCost], range_start: str, range_end: str) -> list[Occurrence]:
        """Dated charges of the active costs within the range, newest first."""
        active = [c for c in costs if c.status == "active"]
        return self._recurrence.materialize(active, range_start, range_end)

    # ── Splitting ─────────────────────────────────────────────────────────────

    def distribute(
        self,
        amount: float,
        split_type: str,
        member_ids: list[str],
        splits: list[CostSplit],
    ) -> list[MemberShare]:
        """
        Divide ``amount`` among ``member_ids`` (the active members).

        'equal' covers every member; 'weighted' and 'fixed_amount' only pay out
        to members with a split row. Rows naming anyone outside ``member_ids``
        are ignored.
        """
        if split_type not in SPLIT_TYPES:
            raise InvalidRuleError(f"Unknown split type {split_type!r}.")
        if not member_ids:
            return []

        if split_type == "equal":
            share = amount / len(member_ids)
            return [MemberShare(member_id=m, value=share) for m in member_ids]

        allowed = set(member_ids)
        totals: dict[str, float] = {}
        for split in splits:
            if split.member_id not in allowed:
                continue
            if split_type == "fixed_amount":
                value = float(split.share_amount or 0.0)
            else:
                value = amount * (float(split.share_percent or 0.0) / 100)
            totals[split.member_id] = totals.get(split.member_id, 0.0) + value
        return [MemberShare(member_id=m, value=v) for m, v in totals.items()]

    def member_breakdown(
        self,
        costs: list[HouseholdCost],
        members: list[HouseholdMember],
        payers: list[HouseholdPayer],
        splits: list[CostSplit],
        month_start: str | None = None,
    ) -> list[MemberShare]:
        """Per-member monthly burden, largest first; members owing nothing are left out."""
        month_start = month_start or today_str()
        external_ids = self._external_payer_ids(payers)
        active_ids = [m.id for m in members if m.is_active]
        totals = {member_id: 0.0 for member_id in active_ids}

        for cost in costs:
            if not self.is_relevant_for_month(cost, month_start):
                continue
            if cost.payer_id and cost.payer_id in external_ids:
                continue
            amount = self.monthly_equivalent(cost)
            if not cost.is_shared:
                if cost.responsible_member_id in totals:
                    totals[cost.responsible_member_id] += amount
                continue
            cost_splits = [s for s in splits if s.cost_id == cost.id]
            for share in self.distribute(amount, cost.split_type, active_ids, cost_splits):
                totals[share.member_id] += share.value

        rows = [MemberShare(member_id=m, value=v) for m, v in totals.items() if v > 0]
        return sorted(rows, key=lambda r: r.value, reverse=True)

    def _external_payer_ids(self, payers: list[HouseholdPayer]) -> set[str]:
        return {p.id for p in payers if p.is_external}
