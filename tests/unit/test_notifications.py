"""Tests de l'adapter de notifications par logging."""

import logging

from vending.adapters.notifications import LoggingNotifications


def test_canal_info(caplog):
    with caplog.at_level(logging.INFO, logger="vending.adapters.notifications"):
        LoggingNotifications().info("Stock OK for machine 001")

    assert caplog.records[0].levelno == logging.INFO
    assert caplog.records[0].getMessage() == "Stock OK for machine 001"


def test_canal_erreur(caplog):
    with caplog.at_level(logging.INFO, logger="vending.adapters.notifications"):
        LoggingNotifications().error("Stock level cannot be negative")

    assert [r.levelno for r in caplog.records] == [logging.ERROR]
