import logging
import math
from datetime import date, timedelta

from models.recurrence_rule import Occurrence, RecurrenceRule
from utils.constants import (
    MATERIALIZE_GUARD, MONTH_STEP_PATTERNS, MONTHLY_FAST_FORWARD_GUARD,
    RECURRENCE_PATTERNS, WEEKLY_INTERVAL_DAYS,
)
from utils.date_helpers import format_date, parse_date, require_date, shift_months
from utils.errors import InvalidRuleError

logger = logging.getLogger(__name__)


class RecurrenceService:
    """Expands recurrence rules into dated occurrences.

    Works on any record exposing ``id``, ``amount`` and ``rule`` (a
    ``RecurrenceRule``): income entries and household costs both do.
    Nothing is cached between calls.
    """

    def materialize(self, items, range_start: str, range_end: str) -> list[Occurrence]:
        """
        Return every occurrence of ``items`` dated within [range_start, range_end],
        newest first. All rules are validated before any stepping starts.
        """
        start = require_date(range_start)
        end = require_date(range_end)
        items = list(items)
        for item in items:
            self.validate_rule(item.rule, source_id=item.id)

        result: list[Occurrence] = []
        if start > end:
            return result

        for item in items:
            for d in self._dates_in_range(item.rule, start, end):
                result.append(Occurrence(
                    source_id=str(item.id),
                    date=format_date(d),
                    amount=item.amount,
                    source=item,
                ))

        logger.debug(
            "Materialized %d occurrences from %d rules for %s..%s",
            len(result), len(items), range_start, range_end,
        )
        return sorted(result, key=lambda o: o.date, reverse=True)

    def dates_for_rule(self, rule: RecurrenceRule, range_start: str, range_end: str) -> list[str]:
        """Ascending occurrence dates of a single rule within the range."""
        self.validate_rule(rule)
        start = require_date(range_start)
        end = require_date(range_end)
        return [format_date(d) for d in self._dates_in_range(rule, start, end)]

    def next_occurrence(self, rule: RecurrenceRule, on_or_after: str) -> str | None:
        """First occurrence on or after the given date, or None once the rule has ended."""
        self.validate_rule(rule)
        anchor = parse_date(rule.anchor_date)
        from_date = require_date(on_or_after)
        rule_end = parse_date(rule.end_date) if rule.end_date else None

        if not rule.is_recurring:
            candidate = anchor if anchor >= from_date else None
        else:
            candidate = self._nth(rule, anchor, self._fast_forward(rule, anchor, from_date))
            if candidate < from_date:
                candidate = None
        if candidate is None or (rule_end and candidate > rule_end):
            return None
        return format_date(candidate)

    def validate_rule(self, rule: RecurrenceRule, source_id=None):
        label = f"Rule {source_id}: " if source_id is not None else ""
        if rule.pattern not in RECURRENCE_PATTERNS:
            raise InvalidRuleError(f"{label}unknown recurrence pattern {rule.pattern!r}.")
        anchor = parse_date(rule.anchor_date)
        if anchor is None:
            raise InvalidRuleError(f"{label}invalid anchor date {rule.anchor_date!r}.")
        if rule.end_date:
            end = parse_date(rule.end_date)
            if end is None:
                raise InvalidRuleError(f"{label}invalid end date {rule.end_date!r}.")
            if end < anchor:
                raise InvalidRuleError(f"{label}end date {rule.end_date} is before {rule.anchor_date}.")
        if rule.pattern == "custom-days":
            interval = rule.interval_days
            if (
                isinstance(interval, bool)
                or not isinstance(interval, (int, float))
                or not math.isfinite(interval)
                or interval != int(interval)
                or interval <= 0
            ):
                raise InvalidRuleError(f"{label}custom interval must be a positive number of days.")

    # ── Stepping ──────────────────────────────────────────────────────────────

    def _dates_in_range(self, rule: RecurrenceRule, start: date, end: date) -> list[date]:
        anchor = parse_date(rule.anchor_date)
        rule_end = parse_date(rule.end_date) if rule.end_date else None

        if rule_end and rule_end < start:
            return []
        if anchor > end:
            return []

        if not rule.is_recurring:
            if start <= anchor <= end and (rule_end is None or anchor <= rule_end):
                return [anchor]
            return []

        result = []
        n = self._fast_forward(rule, anchor, start)
        iterations = 0
        while iterations < MATERIALIZE_GUARD:
            current = self._nth(rule, anchor, n)
            if current > end or (rule_end and current > rule_end):
                break
            if current >= start:
                result.append(current)
            n += 1
            iterations += 1
        else:
            logger.warning(
                "Stopped expanding rule anchored %s after %d steps", rule.anchor_date, MATERIALIZE_GUARD
            )
        return result

    def _nth(self, rule: RecurrenceRule, anchor: date, n: int) -> date:
        """The n-th occurrence counted from the anchor (n = 0 is the anchor itself).

        Month steps are always taken from the anchor so a 31st keeps landing on
        the last day of short months instead of drifting to the 28th.
        """
        if rule.pattern in MONTH_STEP_PATTERNS:
            return shift_months(anchor, n * MONTH_STEP_PATTERNS[rule.pattern])
        return anchor + timedelta(days=n * self._interval_days(rule))

    def _fast_forward(self, rule: RecurrenceRule, anchor: date, from_date: date) -> int:
        """Index of the first occurrence on or after ``from_date``."""
        if from_date <= anchor:
            return 0

        if rule.pattern in MONTH_STEP_PATTERNS:
            n = 0
            while self._nth(rule, anchor, n) < from_date and n < MONTHLY_FAST_FORWARD_GUARD:
                n += 1
            return n

        interval = self._interval_days(rule)
        days_since = (from_date - anchor).days
        n = days_since // interval
        if anchor + timedelta(days=n * interval) < from_date:
            n += 1
        return n

    def _interval_days(self, rule: RecurrenceRule) -> int:
        if rule.pattern == "weekly":
            return WEEKLY_INTERVAL_DAYS
        return int(rule.interval_days)
