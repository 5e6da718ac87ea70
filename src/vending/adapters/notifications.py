"""
Adapter pour les notifications.

Ce module fournit une abstraction sur la sortie des messages
destinés à l'opérateur. Deux canaux existent : `info` pour les
notifications (stock bas, stock rétabli, annulation) et `error`
pour les transitions refusées.
"""

from __future__ import annotations

import abc
import logging

logger = logging.getLogger(__name__)


class AbstractNotifications(abc.ABC):
    """Interface abstraite pour les notifications."""

    @abc.abstractmethod
    def info(self, message: str) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def error(self, message: str) -> None:
        raise NotImplementedError


class LoggingNotifications(AbstractNotifications):
    """Implémentation concrète écrivant dans le logging standard."""

    def __init__(self, log: logging.Logger = logger):
        self.log = log

    def info(self, message: str) -> None:
        self.log.info("%s", message)

    def error(self, message: str) -> None:
        self.log.error("%s", message)
