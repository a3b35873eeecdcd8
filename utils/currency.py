import math

from utils.constants import CURRENCY_SYMBOLS, DEFAULT_CURRENCY, MASKED_AMOUNT, SUPPORTED_CURRENCIES


def normalize_currency(currency: str) -> str:
    """Unknown currency codes fall back to EUR."""
    upper = (currency or "").upper()
    return upper if upper in SUPPORTED_CURRENCIES else DEFAULT_CURRENCY


def format_currency(amount: float, symbol: str = "€") -> str:
    """Format a float as currency string, e.g. '€1,234.56'."""
    return f"{symbol}{amount:,.2f}"


def format_money(amount: float, currency: str = DEFAULT_CURRENCY, masked: bool = False) -> str:
    if masked:
        return MASKED_AMOUNT
    symbol = CURRENCY_SYMBOLS[normalize_currency(currency)]
    if amount < 0:
        return "-" + format_currency(abs(amount), symbol)
    return format_currency(amount, symbol)


def format_signed(amount: float, symbol: str = "€") -> str:
    """Format with +/- sign."""
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{symbol}{abs(amount):,.2f}"


def to_percent(value: float, decimals: int = 1) -> str:
    return f"{value:,.{decimals}f}%"


def round_to_cents(value: float) -> float:
    """Round half up to two decimals."""
    return math.floor(value * 100 + 0.5) / 100


def median(values: list[float]) -> float:
    if not values:
        return 0.0
    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[middle - 1] + ordered[middle]) / 2
    return ordered[middle]
