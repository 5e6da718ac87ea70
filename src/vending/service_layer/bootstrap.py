"""
Bootstrap : assemblage de l'application (Composition Root).

Ce module construit le dispatcher et y abonne tous les subscribers.
C'est ici que l'injection de dépendances est réalisée : on assemble
les composants concrets (ou les fakes pour les tests).
"""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from vending import config
from vending.adapters import notifications, orm, repository
from vending.domain.events import EventKind
from vending.service_layer import handlers
from vending.service_layer.dispatcher import Dispatcher


def bootstrap(
    start_orm: bool = True,
    repo: repository.AbstractRepository | None = None,
    notifications_adapter: notifications.AbstractNotifications | None = None,
    dispatcher: Dispatcher | None = None,
    threshold: int | None = None,
) -> Dispatcher:
    """
    Construit et retourne un Dispatcher configuré.

    En production, utilise SQLAlchemy et les notifications par logging.
    En test, on injecte des fakes et un Dispatcher() neuf.
    Sans dispatcher fourni, une nouvelle instance est créée : appeler
    bootstrap deux fois sur Dispatcher.instance() doublerait les abonnements.
    """
    if start_orm:
        orm.start_mappers()

    if repo is None:
        repo = sqlalchemy_repository()

    if notifications_adapter is None:
        notifications_adapter = notifications.LoggingNotifications()

    if dispatcher is None:
        dispatcher = Dispatcher()

    if threshold is None:
        threshold = config.get_stock_threshold()

    subscriptions = {
        EventKind.SALE: handlers.MachineSaleSubscriber(
            repo, dispatcher, notifications_adapter, threshold
        ),
        EventKind.REFILL: handlers.MachineRefillSubscriber(
            repo, dispatcher, notifications_adapter, threshold
        ),
        EventKind.LOW_STOCK: handlers.StockWarningSubscriber(notifications_adapter),
        EventKind.STOCK_OK: handlers.StockOKSubscriber(notifications_adapter),
    }
    for kind, subscriber in subscriptions.items():
        dispatcher.subscribe(kind, subscriber)

    return dispatcher


def sqlalchemy_repository(db_uri: str | None = None) -> repository.SqlAlchemyRepository:
    """Crée les tables si besoin et retourne un repository sur une session neuve."""
    engine = create_engine(db_uri or config.get_db_uri())
    orm.metadata.create_all(engine)
    return repository.SqlAlchemyRepository(sessionmaker(bind=engine)())
