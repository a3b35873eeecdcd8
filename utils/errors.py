"""Error types raised by the calculators.

All of them derive from ``ValueError`` so callers that already guard input
handling with ``except ValueError`` keep working.
"""


class FinanceError(ValueError):
    """Base class for rejected input."""


class InvalidDateError(FinanceError):
    """A date string is not a valid ``YYYY-MM-DD`` calendar date."""


class InvalidRuleError(FinanceError):
    """A recurrence rule or billing cycle cannot be stepped."""


class InvalidScenarioError(FinanceError):
    """An interest scenario carries non-finite or out-of-range numbers."""


class InvalidShiftError(FinanceError):
    """A shift has a malformed time or date, a bad rate, or zero duration."""
