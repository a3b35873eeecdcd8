import pytest

from models.household import HouseholdCost
from models.income_entry import IncomeEntry
from models.recurrence_rule import RecurrenceRule
from services.recurrence_service import RecurrenceService
from utils.errors import InvalidRuleError


def _entry(**overrides):
    values = dict(id="income-1", amount=1000.0, date="2025-01-15", source="Job", recurring="none")
    values.update(overrides)
    return IncomeEntry(**values)


@pytest.fixture
def service():
    return RecurrenceService()


def test_monthly_entry_expands_inside_range(service):
    rows = service.materialize([_entry(recurring="monthly")], "2025-03-01", "2025-05-31")

    assert [r.date for r in rows] == ["2025-05-15", "2025-04-15", "2025-03-15"]
    assert sum(r.amount for r in rows) == 3000


def test_custom_interval_entry_jumps_to_range_start(service):
    entry = _entry(recurring="custom", recurring_interval_days=10, amount=100.0)

    rows = service.materialize([entry], "2025-01-20", "2025-02-15")

    assert [r.date for r in rows] == ["2025-02-14", "2025-02-04", "2025-01-25"]
    assert sum(r.amount for r in rows) == 300


def test_weekly_entry_far_behind_range(service):
    entry = _entry(recurring="weekly", date="2020-01-06")

    rows = service.materialize([entry], "2025-01-01", "2025-01-31")

    assert [r.date for r in rows] == ["2025-01-27", "2025-01-20", "2025-01-13", "2025-01-06"]


def test_one_time_entry_stays_single(service):
    rows = service.materialize([_entry()], "2025-01-01", "2025-12-31")

    assert len(rows) == 1
    assert rows[0].id == "income-1::2025-01-15"


def test_one_time_entry_outside_range_is_dropped(service):
    assert service.materialize([_entry()], "2025-02-01", "2025-12-31") == []


def test_occurrence_ids_combine_source_and_date(service):
    rows = service.materialize([_entry(recurring="monthly")], "2025-01-01", "2025-02-28")

    assert [r.id for r in rows] == ["income-1::2025-02-15", "income-1::2025-01-15"]
    assert all(r.source_id == "income-1" for r in rows)


def test_end_date_stops_enumeration(service):
    entry = _entry(recurring="monthly", end_date="2025-04-20")

    rows = service.materialize([entry], "2025-03-01", "2025-12-31")

    assert [r.date for r in rows] == ["2025-04-15", "2025-03-15"]


def test_rule_ended_before_range_is_skipped(service):
    entry = _entry(recurring="weekly", end_date="2025-02-01")

    assert service.materialize([entry], "2025-03-01", "2025-03-31") == []


def test_anchor_after_range_yields_nothing(service):
    entry = _entry(recurring="monthly", date="2026-01-01")

    assert service.materialize([entry], "2025-01-01", "2025-12-31") == []


def test_month_end_anchor_does_not_drift(service):
    entry = _entry(recurring="monthly", date="2025-01-31")

    rows = service.materialize([entry], "2025-01-01", "2025-04-30")

    assert [r.date for r in rows] == ["2025-04-30", "2025-03-31", "2025-02-28", "2025-01-31"]


def test_materialize_is_idempotent(service):
    entries = [
        _entry(id="a", recurring="monthly"),
        _entry(id="b", recurring="custom", recurring_interval_days=9, amount=50.0),
        _entry(id="c", recurring="weekly", date="2024-11-03"),
    ]

    first = service.materialize(entries, "2025-01-01", "2025-06-30")
    second = service.materialize(entries, "2025-01-01", "2025-06-30")

    assert [(r.id, r.date, r.amount) for r in first] == [(r.id, r.date, r.amount) for r in second]


def test_occurrences_stay_inside_range_and_newest_first(service):
    entries = [
        _entry(id="a", recurring="monthly", date="2023-05-31"),
        _entry(id="b", recurring="custom", recurring_interval_days=3, date="2024-12-30"),
        _entry(id="c", recurring="weekly", date="2025-02-10", end_date="2025-05-01"),
    ]

    rows = service.materialize(entries, "2025-02-01", "2025-04-15")

    assert rows
    assert all("2025-02-01" <= r.date <= "2025-04-15" for r in rows)
    dates = [r.date for r in rows]
    assert dates == sorted(dates, reverse=True)


def test_consecutive_occurrences_strictly_increase(service):
    rule = RecurrenceRule(anchor_date="2024-06-01", pattern="custom-days", interval_days=13)

    dates = service.dates_for_rule(rule, "2024-06-01", "2025-06-01")

    assert all(a < b for a, b in zip(dates, dates[1:]))


def test_integral_float_interval_is_accepted(service):
    rule = RecurrenceRule(anchor_date="2025-01-01", pattern="custom-days", interval_days=10.0)

    assert service.dates_for_rule(rule, "2025-01-05", "2025-01-31") == ["2025-01-11", "2025-01-21", "2025-01-31"]


def test_household_cost_frequencies_materialize(service):
    costs = [
        HouseholdCost(id="rent", name="Rent", amount=900.0, start_date="2025-01-01", frequency="monthly"),
        HouseholdCost(id="insurance", name="Insurance", amount=120.0, start_date="2024-03-10", frequency="yearly"),
        HouseholdCost(id="cleaning", name="Cleaning", amount=40.0, start_date="2025-03-03", frequency="biweekly"),
    ]

    rows = service.materialize(costs, "2025-03-01", "2025-03-31")

    assert sorted(r.id for r in rows) == [
        "cleaning::2025-03-03", "cleaning::2025-03-17", "cleaning::2025-03-31",
        "insurance::2025-03-10", "rent::2025-03-01",
    ]


def test_next_occurrence(service):
    rule = RecurrenceRule(anchor_date="2025-01-15", pattern="monthly", end_date="2025-06-30")

    assert service.next_occurrence(rule, "2025-03-16") == "2025-04-15"
    assert service.next_occurrence(rule, "2025-01-01") == "2025-01-15"
    assert service.next_occurrence(rule, "2025-06-16") is None


@pytest.mark.parametrize("interval", [0, -7, None, 2.5, float("nan")])
def test_custom_rule_without_positive_interval_is_rejected(service, interval):
    entry = _entry(recurring="custom", recurring_interval_days=interval)

    with pytest.raises(InvalidRuleError, match="positive"):
        service.materialize([entry], "2025-01-01", "2025-12-31")


def test_malformed_dates_are_rejected_before_stepping(service):
    good = _entry(id="good", recurring="monthly")
    bad = _entry(id="bad", date="2025-02-31")

    with pytest.raises(InvalidRuleError, match="bad"):
        service.materialize([good, bad], "2025-01-01", "2025-12-31")


def test_end_date_before_anchor_is_rejected(service):
    entry = _entry(recurring="weekly", end_date="2024-12-31")

    with pytest.raises(InvalidRuleError):
        service.materialize([entry], "2025-01-01", "2025-12-31")


def test_unknown_pattern_is_rejected(service):
    with pytest.raises(InvalidRuleError):
        service.dates_for_rule(RecurrenceRule(anchor_date="2025-01-01", pattern="daily"), "2025-01-01", "2025-01-31")


def test_guard_truncates_instead_of_raising(service):
    rule = RecurrenceRule(anchor_date="2000-01-01", pattern="custom-days", interval_days=1)

    dates = service.dates_for_rule(rule, "2000-01-01", "2099-12-31")

    assert 0 < len(dates) < 36500
