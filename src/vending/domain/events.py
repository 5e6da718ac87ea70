"""
Events du domaine.

Les events représentent des faits qui se sont produits sur un distributeur.
Ils sont immuables et portent leur type (EventKind), qui sert de clé
de routage au Dispatcher.

- Sale, Refill : events primaires, produits par l'extérieur
- LowStockWarning, StockOK : events dérivés, publiés pendant le traitement
  d'un event primaire
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar


class EventKind(str, enum.Enum):
    """Ensemble fermé des types d'events, utilisé pour le routage."""

    SALE = "SALE"
    REFILL = "REFILL"
    LOW_STOCK = "LOW_STOCK"
    STOCK_OK = "STOCK_OK"


class Event:
    """Classe de base pour tous les events du domaine."""

    kind: ClassVar[EventKind]
    machine_id: str


@dataclass(frozen=True)
class Sale(Event):
    """Des unités ont été vendues par un distributeur."""

    kind: ClassVar[EventKind] = EventKind.SALE

    sold_quantity: int
    machine_id: str


@dataclass(frozen=True)
class Refill(Event):
    """Un distributeur a été réapprovisionné."""

    kind: ClassVar[EventKind] = EventKind.REFILL

    refill_quantity: int
    machine_id: str


@dataclass(frozen=True)
class LowStockWarning(Event):
    """Le stock d'un distributeur est passé sous le seuil."""

    kind: ClassVar[EventKind] = EventKind.LOW_STOCK

    machine_id: str


@dataclass(frozen=True)
class StockOK(Event):
    """Le stock d'un distributeur est repassé au-dessus du seuil."""

    kind: ClassVar[EventKind] = EventKind.STOCK_OK

    machine_id: str
