"""Tests for logging setup."""

import logging

from loanledger.logging import setup_logging


def _own_handlers(logger):
    return [h for h in logger.handlers if getattr(h, "_loanledger_handler", False)]


def test_setup_logging_level():
    logger = setup_logging("debug")
    assert logger.name == "loanledger"
    assert logger.level == logging.DEBUG


def test_setup_logging_from_environment(monkeypatch):
    monkeypatch.setenv("LOANLEDGER_LOG_LEVEL", "ERROR")
    assert setup_logging().level == logging.ERROR


def test_setup_logging_unknown_level():
    assert setup_logging("chatty").level == logging.WARNING


def test_setup_logging_does_not_stack_handlers():
    setup_logging()
    logger = setup_logging()
    assert len(_own_handlers(logger)) == 1
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
