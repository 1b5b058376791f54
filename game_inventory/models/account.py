from dataclasses import dataclass

from pyrsistent import pvector
from pyrsistent.typing import PVector

from game_inventory.models.server import Server
from game_inventory.types import AccountID


@dataclass(frozen=True)
class Account:
    """Top-level owner of one server per roster entry."""

    id: AccountID
    name: str
    servers: PVector[Server] = pvector()
