"""
Tests unitaires du modèle de domaine.

Ces tests vérifient le comportement de Machine en isolation
complète, sans repository ni dispatcher.
"""

import pytest

from vending.domain.model import (
    DEFAULT_STOCK_LEVEL,
    STOCK_THRESHOLD,
    InvalidQuantity,
    Machine,
    NegativeStockLevel,
    StockError,
)


class TestMachine:
    def test_stock_initial_par_défaut(self):
        assert Machine("001").stock_level == DEFAULT_STOCK_LEVEL == 10

    def test_vendre_réduit_le_stock(self):
        machine = Machine("001")
        machine.sell(2)
        assert machine.stock_level == 8

    def test_vendre_tout_le_stock_est_autorisé(self):
        machine = Machine("001", stock_level=4)
        machine.sell(4)
        assert machine.stock_level == 0

    def test_vente_excédentaire_refusée_sans_mutation(self):
        machine = Machine("001")

        with pytest.raises(NegativeStockLevel, match="Stock level cannot be negative"):
            machine.sell(11)

        assert machine.stock_level == 10

    def test_réapprovisionner_retourne_le_niveau_précédent(self):
        machine = Machine("001", stock_level=2)
        assert machine.refill(3) == 2
        assert machine.stock_level == 5

    def test_réapprovisionnement_sans_plafond(self):
        machine = Machine("001")
        machine.refill(1000)
        assert machine.stock_level == 1010

    def test_réapprovisionnement_négatif_refusé(self):
        machine = Machine("001", stock_level=1)

        with pytest.raises(InvalidQuantity, match="-5"):
            machine.refill(-5)

        assert machine.stock_level == 1

    def test_vente_négative_refusée(self):
        """Une vente négative ne se transforme pas en réapprovisionnement."""
        machine = Machine("001", stock_level=1)

        with pytest.raises(InvalidQuantity):
            machine.sell(-5)

        assert machine.stock_level == 1

    def test_quantité_nulle_acceptée(self):
        machine = Machine("001", stock_level=4)
        machine.sell(0)
        assert machine.refill(0) == 4

    def test_stock_initial_négatif_refusé(self):
        with pytest.raises(NegativeStockLevel, match="Stock level cannot be negative"):
            Machine("001", stock_level=-4)

    def test_stock_initial_nul_accepté(self):
        assert Machine("001", stock_level=0).stock_level == 0

    def test_erreurs_de_stock(self):
        assert issubclass(NegativeStockLevel, StockError)
        assert issubclass(InvalidQuantity, StockError)

    def test_stock_bas_sous_le_seuil(self):
        assert Machine("001", stock_level=STOCK_THRESHOLD - 1).is_low_stock()
        assert not Machine("001", stock_level=STOCK_THRESHOLD).is_low_stock()

    def test_seuil_injectable(self):
        assert Machine("001", stock_level=5).is_low_stock(threshold=6)

    def test_égalité_par_identité(self):
        assert Machine("001", stock_level=1) == Machine("001", stock_level=9)
        assert Machine("001") != Machine("002")
        assert len({Machine("001"), Machine("001")}) == 1
