"""
Tests end-to-end de la simulation du parc.

On passe par le point d'entrée complet :
events aléatoires -> Dispatcher -> Subscribers -> Repository,
avec le repository en mémoire et un singleton de dispatcher isolé.
"""

import logging
import random

import pytest

from vending.adapters import repository
from vending.domain import events
from vending.entrypoints import simulation
from vending.service_layer import bootstrap
from vending.service_layer.dispatcher import Dispatcher


def test_generate_event_reste_dans_le_domaine():
    rng = random.Random(42)

    for _ in range(200):
        event = simulation.generate_event(rng)
        assert event.machine_id in simulation.MACHINE_IDS
        if isinstance(event, events.Sale):
            assert event.sold_quantity in (1, 2)
        else:
            assert event.refill_quantity in (3, 5)


def test_register_machines_est_idempotent():
    repo = repository.InMemoryRepository()

    simulation.register_machines(repo, stock_level=10)
    simulation.register_machines(repo, stock_level=10)

    assert [m.id for m in repo.find_all()] == ["001", "002", "003"]


def test_run_applique_les_events_publiés():
    repo = repository.InMemoryRepository()
    simulation.register_machines(repo, stock_level=10)
    dispatcher = bootstrap.bootstrap(start_orm=False, repo=repo, dispatcher=Dispatcher())

    published = simulation.run(dispatcher, repo, count=20, rng=random.Random(7))

    assert len(published) == 20
    expected = {machine_id: 10 for machine_id in simulation.MACHINE_IDS}
    for event in published:
        if isinstance(event, events.Refill):
            expected[event.machine_id] += event.refill_quantity
        elif expected[event.machine_id] >= event.sold_quantity:
            expected[event.machine_id] -= event.sold_quantity
    assert {m.id: m.stock_level for m in repo.find_all()} == expected


def test_main_en_mémoire(process_dispatcher, caplog):
    with caplog.at_level(logging.INFO):
        code = simulation.main(["--in-memory", "--events", "10", "--seed", "3"])

    assert code == 0
    assert len(process_dispatcher.subscribers(events.EventKind.SALE)) == 1
    assert any("Machine 001" in r.getMessage() for r in caplog.records)


def test_main_une_seule_fois_par_processus(process_dispatcher):
    simulation.main(["--in-memory", "--events", "1", "--seed", "1"])

    with pytest.raises(RuntimeError, match="already started"):
        simulation.main(["--in-memory", "--events", "1"])

    assert len(process_dispatcher.subscribers(events.EventKind.SALE)) == 1
