"""Configuration and logging setup tests."""

import json
import logging

import pytest

from backend.config import Settings, create_supabase_client, load_settings
from backend.observability import JSONFormatter, setup_logging
from backend.utils import fmt_date, fmt_num, to_iso_timestamp


# --- Settings -----------------------------------------------------------------

def test_load_settings_prefers_service_role_key(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://abc.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-key")
    monkeypatch.setenv("SUPABASE_KEY", "anon-key")
    monkeypatch.setenv("DEBUG", "yes")

    settings = load_settings()

    assert settings.supabase_url == "https://abc.supabase.co"
    assert settings.supabase_key == "service-key"
    assert settings.debug is True


def test_load_settings_falls_back_to_supabase_key(monkeypatch):
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
    monkeypatch.setenv("SUPABASE_KEY", "legacy-key")
    monkeypatch.delenv("DEBUG", raising=False)

    settings = load_settings()

    assert settings.supabase_key == "legacy-key"
    assert settings.debug is False


def test_missing_credentials_raise_runtime_error():
    with pytest.raises(RuntimeError, match="Faltan las credenciales"):
        create_supabase_client(Settings(supabase_url="https://abc.supabase.co"))


def test_url_must_be_http():
    with pytest.raises(RuntimeError, match="URL completa"):
        create_supabase_client(Settings(supabase_url="sb_publishable_xyz", supabase_key="k"))


# --- Logging ------------------------------------------------------------------

def test_json_formatter_includes_query_extras():
    record = logging.LogRecord("backend.test", logging.INFO, __file__, 1, "Consultando %s", ("x",), None)
    record.page = 2
    record.open_only = True

    log = json.loads(JSONFormatter().format(record))

    assert log["message"] == "Consultando x"
    assert log["level"] == "INFO"
    assert log["page"] == 2
    assert log["open_only"] is True
    assert "search" not in log


def test_setup_logging_does_not_duplicate_handlers():
    root = logging.getLogger()
    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")

    ours = [h for h in root.handlers if getattr(h, "_tenders_handler", False)]
    assert len(ours) == 1
    assert root.level == logging.INFO


# --- Formatting helpers -------------------------------------------------------

def test_to_iso_timestamp_treats_naive_as_utc():
    from datetime import datetime

    assert to_iso_timestamp(datetime(2030, 5, 6, 7, 8, 9)) == "2030-05-06T07:08:09.000Z"


@pytest.mark.parametrize("value,expected", [(1234567, "1.234.567"), (None, "0"), ("abc", "0"), (12, "12")])
def test_fmt_num(value, expected):
    assert fmt_num(value) == expected


@pytest.mark.parametrize("value,expected", [
    ("2030-07-01T12:00:00+00:00", "01/07/2030"),
    (None, ""),
    ("not a date", "not a date"),
    ("2030-07-01 09:30", "01/07/2030"),
    ("2030-13-01", "2030-13-01"),
    ("", ""),
])
def test_fmt_date(value, expected):
    assert fmt_date(value) == expected


def test_fmt_date_accepts_date_objects():
    from datetime import date, datetime

    assert fmt_date(date(2031, 2, 3)) == "03/02/2031"
    assert fmt_date(datetime(2031, 2, 3, 23, 59)) == "03/02/2031"
