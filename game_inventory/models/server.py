from dataclasses import dataclass

from pyrsistent import pvector
from pyrsistent.typing import PVector

from game_inventory.models.character import Character
from game_inventory.types import ServerID


@dataclass(frozen=True)
class Server:
    """Game server holding a fixed roster of characters."""

    id: ServerID
    name: str
    characters: PVector[Character] = pvector()
