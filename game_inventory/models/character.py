from dataclasses import dataclass

from pyrsistent import pvector
from pyrsistent.typing import PVector

from game_inventory.models.container import Container
from game_inventory.models.item import Item


@dataclass(frozen=True)
class Character:
    """A playable character and its storage.

    Attributes:
        id: Index-derived numeric id.
        name: Display name.
        bank1: First bank container.
        bank2: Second bank container.
        bag: Irregular bag container.
        learned_recipes: Recipes read out of a slot. An item is never in a
            slot and in this list at the same time.
    """

    id: int
    name: str
    bank1: Container
    bank2: Container
    bag: Container
    learned_recipes: PVector[Item] = pvector()
