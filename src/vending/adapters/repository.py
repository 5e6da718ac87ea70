"""
Pattern Repository.

Le repository fournit une abstraction sur la couche de persistance
des distributeurs. Le cœur du système ne consomme que ce contrat :
find_by_id, find_all, save, update, delete.

Les erreurs (doublon à la création, machine absente à la mise à jour
ou à la suppression) sont levées vers l'appelant, jamais avalées.
"""

from __future__ import annotations

import abc

from sqlalchemy.orm import Session

from vending.domain import model


class RepositoryError(Exception):
    """Classe de base des erreurs du repository."""
    pass


class MachineAlreadyExists(RepositoryError):
    """Levée quand on sauvegarde une machine dont l'id existe déjà."""
    pass


class MachineNotFound(RepositoryError):
    """Levée quand une machine référencée n'existe pas."""
    pass


class AbstractRepository(abc.ABC):
    """
    Interface abstraite du repository.

    Le pattern Template Method est utilisé : les méthodes publiques
    vérifient l'existence de la machine et lèvent les erreurs du contrat,
    puis délèguent aux méthodes abstraites préfixées _.
    """

    def find_by_id(self, id: str) -> model.Machine | None:
        """Récupère une machine par son id, ou None si elle n'existe pas."""
        return self._get(id)

    def find_all(self) -> list[model.Machine]:
        return self._list()

    def save(self, machine: model.Machine) -> None:
        """Ajoute une nouvelle machine. Lève MachineAlreadyExists si l'id est pris."""
        if self._get(machine.id) is not None:
            raise MachineAlreadyExists(f"Machine with id {machine.id} already exists")
        self._add(machine)

    def update(self, machine: model.Machine) -> None:
        """Enregistre l'état d'une machine existante. Lève MachineNotFound sinon."""
        if self._get(machine.id) is None:
            raise MachineNotFound(f"Machine with id {machine.id} not found")
        self._update(machine)

    def delete(self, id: str) -> None:
        machine = self._get(id)
        if machine is None:
            raise MachineNotFound(f"Machine with id {id} not found")
        self._delete(machine)

    @abc.abstractmethod
    def _get(self, id: str) -> model.Machine | None:
        raise NotImplementedError

    @abc.abstractmethod
    def _list(self) -> list[model.Machine]:
        raise NotImplementedError

    @abc.abstractmethod
    def _add(self, machine: model.Machine) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def _update(self, machine: model.Machine) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def _delete(self, machine: model.Machine) -> None:
        raise NotImplementedError


class InMemoryRepository(AbstractRepository):
    """
    Repository en mémoire, indexé par id.

    Les machines retournées sont les instances stockées elles-mêmes :
    le store conserve l'ordre d'insertion.
    """

    def __init__(self, machines: list[model.Machine] | None = None):
        self._machines: dict[str, model.Machine] = {}
        for machine in machines or []:
            self.save(machine)

    def _get(self, id: str) -> model.Machine | None:
        return self._machines.get(id)

    def _list(self) -> list[model.Machine]:
        return list(self._machines.values())

    def _add(self, machine: model.Machine) -> None:
        self._machines[machine.id] = machine

    def _update(self, machine: model.Machine) -> None:
        self._machines[machine.id] = machine

    def _delete(self, machine: model.Machine) -> None:
        del self._machines[machine.id]


class SqlAlchemyRepository(AbstractRepository):
    """
    Implémentation concrète du repository avec SQLAlchemy.

    Chaque écriture est committée immédiatement : le contrat ne
    connaît pas de notion de transaction.
    """

    def __init__(self, session: Session):
        self.session = session

    def _get(self, id: str) -> model.Machine | None:
        return self.session.get(model.Machine, id)

    def _list(self) -> list[model.Machine]:
        return (
            self.session.query(model.Machine)
            .order_by(model.Machine.id)
            .all()
        )

    def _add(self, machine: model.Machine) -> None:
        self.session.add(machine)
        self.session.commit()

    def _update(self, machine: model.Machine) -> None:
        self.session.merge(machine)
        self.session.commit()

    def _delete(self, machine: model.Machine) -> None:
        self.session.delete(machine)
        self.session.commit()
