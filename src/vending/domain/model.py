"""
Modèle de domaine pour le parc de distributeurs.

Ce module contient l'entité Machine et les règles qui protègent
son niveau de stock. Les transitions de stock sont validées avant
d'être appliquées : un niveau négatif n'est jamais écrit.
"""

from __future__ import annotations

# Seuil en dessous duquel un distributeur est considéré en stock bas.
STOCK_THRESHOLD = 3

# Niveau de stock attribué à un distributeur nouvellement créé.
DEFAULT_STOCK_LEVEL = 10


class StockError(Exception):
    """Classe de base des transitions de stock refusées."""
    pass


class NegativeStockLevel(StockError):
    """Levée quand une transition rendrait le niveau de stock négatif."""
    pass


class InvalidQuantity(StockError):
    """Levée quand une vente ou un réapprovisionnement porte sur une quantité négative."""
    pass


class Machine:
    """
    Entité représentant un distributeur.

    Une Machine a une identité (son id) et un niveau de stock mutable.
    L'égalité et le hash sont basés sur l'id, pas sur le stock.
    """

    def __init__(self, id: str, stock_level: int = DEFAULT_STOCK_LEVEL):
        self.id = id
        self._commit(stock_level)

    def __repr__(self) -> str:
        return f"<Machine {self.id} stock={self.stock_level}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Machine):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def sell(self, quantity: int) -> None:
        """
        Retire `quantity` unités du stock.

        Le nouveau niveau est calculé puis vérifié avant toute écriture :
        si la vente est refusée, le stock reste intact.
        """
        _check_quantity(quantity)
        self._commit(self.stock_level - quantity)

    def refill(self, quantity: int) -> int:
        """Ajoute `quantity` unités (sans plafond) et retourne le niveau précédent."""
        _check_quantity(quantity)
        stock_before = self.stock_level
        self._commit(stock_before + quantity)
        return stock_before

    def is_low_stock(self, threshold: int = STOCK_THRESHOLD) -> bool:
        return self.stock_level < threshold

    def _commit(self, new_level: int) -> None:
        if new_level < 0:
            raise NegativeStockLevel("Stock level cannot be negative")
        self.stock_level = new_level


def _check_quantity(quantity: int) -> None:
    # Une quantité nulle est acceptée : elle ne change pas le stock.
    if quantity < 0:
        raise InvalidQuantity(f"Quantity cannot be negative: {quantity}")
