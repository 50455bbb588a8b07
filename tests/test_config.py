"""Settings lookup tests (environment only; no secrets.toml in the test run)."""

import pytest

import config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("URBANECO_LOADING_DELAY", "URBANECO_BASE_YEAR", "URBANECO_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    assert config.loading_delay() == 1.2
    assert config.base_year() == 2025
    assert config.log_level() == "INFO"


def test_get_setting_default():
    assert config.get_setting("URBANECO_NOT_SET", "fallback") == "fallback"


def test_loading_delay_from_env(monkeypatch):
    monkeypatch.setenv("URBANECO_LOADING_DELAY", "0")
    assert config.loading_delay() == 0.0


def test_negative_delay_clamped(monkeypatch):
    monkeypatch.setenv("URBANECO_LOADING_DELAY", "-3")
    assert config.loading_delay() == 0.0


def test_bad_delay_falls_back(monkeypatch):
    monkeypatch.setenv("URBANECO_LOADING_DELAY", "soon")
    assert config.loading_delay() == 1.2


def test_base_year(monkeypatch):
    monkeypatch.setenv("URBANECO_BASE_YEAR", "2030")
    assert config.base_year() == 2030
    monkeypatch.setenv("URBANECO_BASE_YEAR", "next year")
    assert config.base_year() == 2025


def test_log_level(monkeypatch):
    monkeypatch.setenv("URBANECO_LOG_LEVEL", "debug")
    assert config.log_level() == "DEBUG"
    monkeypatch.setenv("URBANECO_LOG_LEVEL", "chatty")
    assert config.log_level() == "INFO"
