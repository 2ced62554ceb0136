import logging

import pytest

from calcapp.config import SystemSettings
from calcapp.logging_config import QUIET_LOGGERS, configure_logging, resolve_level


@pytest.fixture
def restore_levels():
    saved = {name: logging.getLogger(name).level for name in QUIET_LOGGERS}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_level_from_system_settings(monkeypatch):
    monkeypatch.setenv("CALC_LOG_LEVEL", "debug")
    assert resolve_level(None, SystemSettings()) == logging.DEBUG


def test_explicit_level_wins_over_settings():
    assert resolve_level("error", SystemSettings(log_level="DEBUG")) == logging.ERROR


def test_unknown_level_falls_back_to_info():
    assert resolve_level("chatty") == logging.INFO
    assert resolve_level() == logging.INFO


def test_http_client_loggers_held_at_warning(restore_levels):
    assert configure_logging(system=SystemSettings(log_level="DEBUG")) == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("anthropic").level == logging.WARNING


def test_quiet_loggers_follow_stricter_level(restore_levels):
    configure_logging("ERROR")
    assert logging.getLogger("httpx").level == logging.ERROR
