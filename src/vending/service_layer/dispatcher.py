"""
Dispatcher (routeur publish/subscribe).

Le dispatcher est le point central de distribution des events
vers les subscribers enregistrés pour leur type (EventKind).

Fonctionnement :
1. Un event est publié via publish()
2. Le dispatcher retrouve la liste des subscribers pour event.kind
3. Chaque subscriber est appelé, dans l'ordre d'enregistrement
4. Un subscriber peut lui-même publier : l'event dérivé est traité
   entièrement avant que l'appel englobant ne reprenne (pas de queue)

Contrairement au message bus, aucune erreur n'est interceptée :
une exception levée par un subscriber remonte jusqu'au publieur.
"""

from __future__ import annotations

import logging
from typing import ClassVar, Protocol

from vending.domain import events

logger = logging.getLogger(__name__)


class Subscriber(Protocol):
    """Tout objet exposant handle(event) peut s'abonner."""

    def handle(self, event: events.Event) -> None:
        ...


class Dispatcher:
    """
    Routeur d'events synchrone.

    Deux modes de construction coexistent avec la même sémantique :
    - Dispatcher.instance() : instance unique du processus, créée à la
      première demande et jamais détruite
    - Dispatcher() : instance indépendante (tests, sessions isolées)
    """

    _instance: ClassVar[Dispatcher | None] = None

    def __init__(self) -> None:
        self._subscribers: dict[events.EventKind, list[Subscriber]] = {}

    @classmethod
    def instance(cls) -> Dispatcher:
        """Retourne le dispatcher du processus, en le créant si besoin."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def subscribe(self, kind: events.EventKind, subscriber: Subscriber) -> None:
        """
        Ajoute un subscriber en fin de liste pour `kind`.

        Pas de dédoublonnage : un subscriber enregistré deux fois
        est appelé deux fois par publication.
        """
        self._subscribers.setdefault(kind, []).append(subscriber)

    def unsubscribe(self, kind: events.EventKind, subscriber: Subscriber) -> None:
        """Retire toutes les occurrences de `subscriber` (comparaison par identité)."""
        current = self._subscribers.get(kind)
        if not current:
            return
        self._subscribers[kind] = [s for s in current if s is not subscriber]

    def subscribers(self, kind: events.EventKind) -> list[Subscriber]:
        return list(self._subscribers.get(kind, []))

    def publish(self, event: events.Event) -> None:
        """
        Distribue un event à ses subscribers, synchronement.

        On itère sur une copie de la liste : un abonnement ou
        désabonnement fait pendant la distribution ne s'applique
        qu'aux publications suivantes.
        """
        for subscriber in self.subscribers(event.kind):
            logger.debug("Distribution de l'event %s à %s", event, subscriber)
            subscriber.handle(event)
