"""
Point d'entrée de simulation du parc.

Crée les distributeurs 001, 002 et 003, génère des events de vente
et de réapprovisionnement aléatoires, les publie sur le dispatcher
du processus puis affiche les niveaux de stock finaux.

Ce module ne contient aucune logique métier : il produit des events
et laisse le dispatcher et les subscribers faire le reste.
"""

from __future__ import annotations

import argparse
import logging
import random

from vending import config
from vending.adapters import repository
from vending.domain import events, model
from vending.service_layer import bootstrap
from vending.service_layer.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

MACHINE_IDS = ("001", "002", "003")


def random_machine_id(rng: random.Random) -> str:
    return rng.choice(MACHINE_IDS)


def generate_event(rng: random.Random) -> events.Event:
    """Une chance sur deux : vente de 1 ou 2 unités, sinon réappro de 3 ou 5."""
    if rng.random() < 0.5:
        return events.Sale(
            sold_quantity=rng.choice((1, 2)), machine_id=random_machine_id(rng)
        )
    return events.Refill(
        refill_quantity=rng.choice((3, 5)), machine_id=random_machine_id(rng)
    )


def register_machines(
    repo: repository.AbstractRepository, stock_level: int
) -> None:
    """Enregistre les machines du parc absentes du repository."""
    for machine_id in MACHINE_IDS:
        if repo.find_by_id(machine_id) is None:
            repo.save(model.Machine(machine_id, stock_level=stock_level))


def run(
    dispatcher: Dispatcher,
    repo: repository.AbstractRepository,
    count: int = 5,
    rng: random.Random | None = None,
) -> list[events.Event]:
    """Publie `count` events aléatoires et retourne ceux qui ont été publiés."""
    rng = rng or random.Random()
    published = []
    for _ in range(count):
        event = generate_event(rng)
        logger.info("Publication de %s", event)
        dispatcher.publish(event)
        published.append(event)

    for machine in repo.find_all():
        logger.info("Machine %s : stock %d", machine.id, machine.stock_level)
    return published


def main(argv: list[str] | None = None) -> int:
    """
    Lance la simulation sur le dispatcher du processus.

    Ne s'exécute qu'une fois par processus : un second appel abonnerait
    les subscribers une deuxième fois au même dispatcher.
    """
    parser = argparse.ArgumentParser(
        prog="vending-simulation",
        description="Simule des ventes et réapprovisionnements sur le parc.",
    )
    parser.add_argument("--events", type=int, default=5, help="nombre d'events à publier")
    parser.add_argument("--seed", type=int, default=None, help="graine du générateur")
    parser.add_argument(
        "--in-memory",
        action="store_true",
        help="utilise un repository en mémoire au lieu de la base SQL",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=config.get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    process_dispatcher = Dispatcher.instance()
    if process_dispatcher.subscribers(events.EventKind.SALE):
        raise RuntimeError("Simulation already started in this process")

    if args.in_memory:
        repo: repository.AbstractRepository = repository.InMemoryRepository()
    else:
        repo = bootstrap.sqlalchemy_repository()
    dispatcher = bootstrap.bootstrap(
        start_orm=not args.in_memory,
        repo=repo,
        dispatcher=process_dispatcher,
    )
    register_machines(repo, config.get_initial_stock_level())
    run(dispatcher, repo, count=args.events, rng=random.Random(args.seed))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
