CONFIG_DIR_NAME = ".fintrack"
CONFIG_DIR_ENV = "FINTRACK_CONFIG_DIR"

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

# ── Iteration guards ─────────────────────────────────────────────────────────
MONTHLY_FAST_FORWARD_GUARD = 600
MATERIALIZE_GUARD = 2000
BILLING_CYCLE_GUARD = 500

# ── Recurrence ───────────────────────────────────────────────────────────────
RECURRENCE_PATTERNS = ["none", "weekly", "monthly", "yearly", "custom-days"]
MONTH_STEP_PATTERNS = {
    "monthly": 1,
    "yearly": 12,
}
WEEKLY_INTERVAL_DAYS = 7

# ── Subscriptions ────────────────────────────────────────────────────────────
SUBSCRIPTION_INTERVALS = ["monthly", "yearly", "four-weekly", "custom-months"]
BILLED_STATUSES = ("active", "paused")
FOUR_WEEKLY_DAYS = 28
UPCOMING_PAYMENT_DAYS = 30
TREND_MONTHS = 12

# ── Interest ─────────────────────────────────────────────────────────────────
FREQUENCIES = ["monthly", "yearly"]
MAX_DURATION_MONTHS = 1200

# ── Household ────────────────────────────────────────────────────────────────
SPLIT_TYPES = ["equal", "weighted", "fixed_amount"]
HOUSEHOLD_MONTHLY_FACTORS = {
    "weekly": 52 / 12,
    "biweekly": 26 / 12,
    "monthly": 1.0,
    "yearly": 1 / 12,
}

# ── Shift jobs ───────────────────────────────────────────────────────────────
MINUTES_PER_DAY = 24 * 60
FIXED_PAY_INTERVALS = {
    "monthly": ("monthly", None),
    "weekly": ("weekly", None),
    "biweekly": ("custom-days", 14),
}
THIRTEENTH_SALARY_MONTH = 6
FOURTEENTH_SALARY_MONTH = 11
ANNUAL_BONUS_INTERVAL_DAYS = 365

# ── Display ──────────────────────────────────────────────────────────────────
SUPPORTED_CURRENCIES = ["EUR", "USD"]
CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$"}
DEFAULT_CURRENCY = "EUR"
DEFAULT_DATE_FORMAT = "DD.MM.YYYY"
DEFAULT_LOG_LEVEL = "INFO"
MASKED_AMOUNT = "****"

SEVERITY_ORDER = {"error": 0, "warning": 1, "info": 2}

CHART_COLORS = {
    "income":       "#4CAF50",
    "expense":      "#F44336",
    "balance":      "#2196F3",
    "real_balance": "#FF9800",
    "contribution": "#9C27B0",
    "trend":        "#009688",
}
