"""
Mapping ORM avec SQLAlchemy (classical mapping).

On définit la table séparément, puis on mappe la classe Machine
du domaine sur cette table. Le modèle de domaine reste ainsi
ignorant de la persistance (persistence ignorance).
"""

from sqlalchemy import Column, Integer, MetaData, String, Table
from sqlalchemy.orm import registry

from vending.domain import model

metadata = MetaData()
mapper_registry = registry(metadata=metadata)

machines = Table(
    "machines",
    metadata,
    Column("id", String(255), primary_key=True),
    Column("stock_level", Integer, nullable=False),
)


def start_mappers() -> None:
    """
    Configure le mapping entre Machine et la table `machines`.

    Ne doit être appelé qu'une fois par processus : SQLAlchemy refuse
    de mapper deux fois la même classe.
    """
    mapper_registry.map_imperatively(model.Machine, machines)
