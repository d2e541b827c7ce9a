from __future__ import annotations

import logging

import pytest

import personal_ledger.logging_setup as logging_setup


@pytest.fixture
def fresh_pkg_logger(monkeypatch: pytest.MonkeyPatch):
    """Unconfigured package logger; original handlers/level restored afterwards."""

    logger = logging.getLogger("personal_ledger")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    logger.handlers = []
    yield logger
    logger.handlers = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


def test_level_from_environment(fresh_pkg_logger, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PERSONAL_LEDGER_LOG_LEVEL", "debug")

    logging_setup.configure_logging()

    assert fresh_pkg_logger.level == logging.DEBUG
    assert fresh_pkg_logger.propagate is False
    assert [type(h) for h in fresh_pkg_logger.handlers] == [logging.StreamHandler]


def test_explicit_level_wins_and_second_call_is_noop(fresh_pkg_logger, monkeypatch):
    monkeypatch.setenv("PERSONAL_LEDGER_LOG_LEVEL", "DEBUG")

    logging_setup.configure_logging("WARNING")
    logging_setup.configure_logging("DEBUG")

    assert fresh_pkg_logger.level == logging.WARNING
    assert len(fresh_pkg_logger.handlers) == 1


def test_get_logger_is_silent_until_configured(fresh_pkg_logger):
    log = logging_setup.get_logger("personal_ledger.storage")

    assert log.name == "personal_ledger.storage"
    assert [type(h) for h in fresh_pkg_logger.handlers] == [logging.NullHandler]
