"""Container value object.

Every character owns three containers: two rectangular banks and the
irregular bag. ``rows``/``cols`` describe the visual grid; the mapping
between grid coordinates and ``slots`` lives in :mod:`game_inventory.layout`.
"""

from dataclasses import dataclass

from pyrsistent import pvector
from pyrsistent.typing import PVector

from game_inventory.models.slot import Slot
from game_inventory.types import ContainerID


@dataclass(frozen=True)
class Container:
    """Grid of slots.

    Attributes:
        id: Container identifier (``char_<n>_bank1`` and friends).
        name: Display name.
        rows: Grid height.
        cols: Grid width.
        slots: Slot vector. Never shorter than the layout requires and never
            shrunk by normalization.
    """

    id: ContainerID
    name: str
    rows: int
    cols: int
    slots: PVector[Slot] = pvector()
