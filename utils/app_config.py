"""User-level configuration. Zero imports from the services.

Preferences the calculators' callers need (display currency, date pattern,
log level, reminder window) live in ~/.fintrack/config.json. Set
FINTRACK_CONFIG_DIR to point somewhere else.
"""
import json
import logging
import os
from pathlib import Path

from utils.constants import (
    CONFIG_DIR_ENV, CONFIG_DIR_NAME, DEFAULT_CURRENCY, DEFAULT_DATE_FORMAT,
    DEFAULT_LOG_LEVEL, SUPPORTED_CURRENCIES, UPCOMING_PAYMENT_DAYS,
)
from utils.date_helpers import DATE_FORMAT_OPTIONS

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


def config_dir() -> Path:
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    return Path.home() / CONFIG_DIR_NAME


def config_file() -> Path:
    return config_dir() / CONFIG_FILE_NAME


def load_config() -> dict:
    """Returns {} on missing or corrupt file; never raises."""
    path = config_file()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(config: dict) -> None:
    """Creates the config dir if needed; atomic write via .tmp + os.replace()."""
    path = config_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


def set_setting(key: str, value) -> None:
    config = load_config()
    if value is None:
        config.pop(key, None)
    else:
        config[key] = value
    save_config(config)


def get_currency() -> str:
    value = str(load_config().get("currency", DEFAULT_CURRENCY)).upper()
    return value if value in SUPPORTED_CURRENCIES else DEFAULT_CURRENCY


def get_date_format() -> str:
    value = load_config().get("date_format", DEFAULT_DATE_FORMAT)
    return value if value in DATE_FORMAT_OPTIONS else DEFAULT_DATE_FORMAT


def get_log_level() -> str:
    return str(load_config().get("log_level", DEFAULT_LOG_LEVEL)).upper()


def get_upcoming_days() -> int:
    value = load_config().get("upcoming_days", UPCOMING_PAYMENT_DAYS)
    try:
        days = int(value)
    except (TypeError, ValueError):
        return UPCOMING_PAYMENT_DAYS
    return days if days >= 0 else UPCOMING_PAYMENT_DAYS
