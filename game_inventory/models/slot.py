from dataclasses import dataclass
from typing import Optional

from game_inventory.models.item import Item
from game_inventory.types import SlotID


@dataclass(frozen=True)
class Slot:
    """Addressable cell of a container.

    Attributes:
        id: Index of the slot in its container's ``slots`` vector. Stable:
            items move between slots, slots are never reordered.
        item: Occupying item, ``None`` when empty.
    """

    id: SlotID
    item: Optional[Item] = None
