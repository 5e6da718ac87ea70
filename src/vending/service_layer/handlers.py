"""
Subscribers pour les events des distributeurs.

- Sale / Refill : appliquent la transition de stock via le repository,
  puis publient un event dérivé si le seuil est franchi
- LowStockWarning / StockOK : notifient l'opérateur (aucune mutation)

Les events dérivés sont publiés sur le dispatcher injecté, pendant
le traitement de l'event primaire.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from vending.adapters.repository import MachineNotFound
from vending.domain import events, model

if TYPE_CHECKING:
    from vending.adapters.notifications import AbstractNotifications
    from vending.adapters.repository import AbstractRepository
    from vending.service_layer.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


def _get_machine(repository: AbstractRepository, machine_id: str) -> model.Machine:
    machine = repository.find_by_id(machine_id)
    if machine is None:
        raise MachineNotFound(f"Machine with id {machine_id} not found")
    return machine


def _reject(
    notifications: AbstractNotifications, machine: model.Machine, error: model.StockError
) -> None:
    notifications.error(str(error))
    notifications.info(
        f"Rolling back stock level for machine {machine.id}"
        f" (kept at {machine.stock_level})"
    )


# --- Transitions de stock ---


class MachineSaleSubscriber:
    """
    Diminue le stock d'une machine lors d'une vente.

    Une vente de quantité négative, ou qui rendrait le stock négatif,
    est refusée en entier :
    l'erreur est notifiée, le stock et le repository restent intacts,
    et le seuil n'est pas évalué. Sinon, si le niveau obtenu est sous
    le seuil, un LowStockWarning est publié.
    """

    def __init__(
        self,
        repository: AbstractRepository,
        dispatcher: Dispatcher,
        notifications: AbstractNotifications,
        threshold: int = model.STOCK_THRESHOLD,
    ):
        self.repository = repository
        self.dispatcher = dispatcher
        self.notifications = notifications
        self.threshold = threshold

    def handle(self, event: events.Sale) -> None:
        machine = _get_machine(self.repository, event.machine_id)
        try:
            machine.sell(event.sold_quantity)
        except model.StockError as e:
            _reject(self.notifications, machine, e)
            return
        self.repository.update(machine)
        logger.debug("Vente sur %s : stock à %d", machine.id, machine.stock_level)

        if machine.is_low_stock(self.threshold):
            self.dispatcher.publish(events.LowStockWarning(machine_id=machine.id))


class MachineRefillSubscriber:
    """
    Augmente le stock d'une machine lors d'un réapprovisionnement.

    StockOK n'est publié que sur le front montant : stock avant
    sous le seuil, stock après au niveau du seuil ou au-dessus.
    """

    def __init__(
        self,
        repository: AbstractRepository,
        dispatcher: Dispatcher,
        notifications: AbstractNotifications,
        threshold: int = model.STOCK_THRESHOLD,
    ):
        self.repository = repository
        self.dispatcher = dispatcher
        self.notifications = notifications
        self.threshold = threshold

    def handle(self, event: events.Refill) -> None:
        machine = _get_machine(self.repository, event.machine_id)
        try:
            stock_before = machine.refill(event.refill_quantity)
        except model.StockError as e:
            _reject(self.notifications, machine, e)
            return
        self.repository.update(machine)
        logger.debug(
            "Réapprovisionnement de %s : %d -> %d",
            machine.id, stock_before, machine.stock_level,
        )

        if stock_before < self.threshold <= machine.stock_level:
            self.dispatcher.publish(events.StockOK(machine_id=machine.id))


# --- Notifications ---


class StockWarningSubscriber:
    """Notifie qu'une machine est en stock bas."""

    def __init__(self, notifications: AbstractNotifications):
        self.notifications = notifications

    def handle(self, event: events.LowStockWarning) -> None:
        self.notifications.info(f"Low stock warning for machine {event.machine_id}")


class StockOKSubscriber:
    """Notifie que le stock d'une machine est rétabli."""

    def __init__(self, notifications: AbstractNotifications):
        self.notifications = notifications

    def handle(self, event: events.StockOK) -> None:
        self.notifications.info(f"Stock OK for machine {event.machine_id}")
