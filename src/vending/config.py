"""
Configuration de l'application.

Les valeurs sont lues dans les variables d'environnement, avec
des valeurs par défaut adaptées au développement local.
"""

from __future__ import annotations

import os

from vending.domain import model


def get_db_uri() -> str:
    return os.environ.get("VENDING_DB_URI", "sqlite:///vending.db")


def get_stock_threshold() -> int:
    return int(os.environ.get("VENDING_STOCK_THRESHOLD", model.STOCK_THRESHOLD))


def get_initial_stock_level() -> int:
    return int(os.environ.get("VENDING_INITIAL_STOCK", model.DEFAULT_STOCK_LEVEL))


def get_log_level() -> str:
    return os.environ.get("VENDING_LOG_LEVEL", "INFO").upper()
