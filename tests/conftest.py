"""
Configuration partagée pour les tests.

Le mapping ORM est démarré une seule fois pour toute la session de tests.
Cela permet aux tests d'intégration d'utiliser SQLAlchemy sans
interférer avec les tests unitaires.
"""

import pytest

from vending.adapters import orm
from vending.service_layer.dispatcher import Dispatcher


@pytest.fixture(scope="session", autouse=True)
def mappers():
    """Démarre le mapping ORM une fois pour toute la session."""
    orm.start_mappers()


@pytest.fixture
def process_dispatcher(monkeypatch):
    """Isole le dispatcher du processus : chaque test repart d'un singleton vide."""
    monkeypatch.setattr(Dispatcher, "_instance", None)
    return Dispatcher.instance()
