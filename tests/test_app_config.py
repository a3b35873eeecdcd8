import json

import pytest

from utils import app_config


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("FINTRACK_CONFIG_DIR", str(tmp_path))
    return tmp_path


def test_missing_config_gives_defaults():
    assert app_config.load_config() == {}
    assert app_config.get_currency() == "EUR"
    assert app_config.get_date_format() == "DD.MM.YYYY"
    assert app_config.get_log_level() == "INFO"
    assert app_config.get_upcoming_days() == 30


def test_settings_round_trip(config_dir):
    app_config.set_setting("currency", "usd")
    app_config.set_setting("date_format", "MM/DD/YYYY")

    assert app_config.get_currency() == "USD"
    assert app_config.get_date_format() == "MM/DD/YYYY"
    assert json.loads((config_dir / "config.json").read_text(encoding="utf-8"))["date_format"] == "MM/DD/YYYY"
    assert not (config_dir / "config.tmp").exists()


def test_setting_none_removes_key():
    app_config.set_setting("log_level", "debug")
    app_config.set_setting("log_level", None)

    assert "log_level" not in app_config.load_config()


def test_corrupt_or_invalid_values_fall_back(config_dir):
    (config_dir / "config.json").write_text("{not json", encoding="utf-8")
    assert app_config.load_config() == {}

    (config_dir / "config.json").write_text(
        json.dumps({"currency": "GBP", "date_format": "YYYY/MM/DD", "upcoming_days": "soon"}),
        encoding="utf-8",
    )
    assert app_config.get_currency() == "EUR"
    assert app_config.get_date_format() == "DD.MM.YYYY"
    assert app_config.get_upcoming_days() == 30
