"""Slot addressing.

Maps between a container's visual grid coordinate ``(row, col)`` and the
index of a slot in its ``slots`` vector. Coordinates are 0-based.

* Banks are rectangular: ``index = row * cols + col``.
* The bag is irregular: 24 base slots form a 4x6 block at the bottom of a
  10x4 grid, and 9 more slots stack upward over the first three columns
  (heights 3, 4 and 2). A formula cannot describe that, so the mapping is the
  single shared table :data:`BAG_SLOT_LAYOUT` (plus its reverse index), used
  by addressing, normalization, import and export alike.

Lookups never raise. Anything outside the geometry yields ``None`` and the
caller treats that as "not applicable".
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple

from game_inventory.models import Container, Slot
from game_inventory.types import SlotID
from game_inventory.utils.text import fold_token


@dataclass(frozen=True)
class SlotPosition:
    """Grid coordinate.

    Attributes:
        row: Row index (0 at top).
        col: Column index (0 at left).
    """

    row: int
    col: int


BAG_GRID_COLS = 4
_BAG_BASE_ROWS = 6
_BAG_TOP_COLUMN_HEIGHTS = (3, 4, 2)
_BAG_TOP_ROWS = max(_BAG_TOP_COLUMN_HEIGHTS)
BAG_GRID_ROWS = _BAG_BASE_ROWS + _BAG_TOP_ROWS


def _build_bag_layout() -> Tuple[SlotPosition, ...]:
    layout = [
        SlotPosition(_BAG_TOP_ROWS + row, col)
        for row in range(_BAG_BASE_ROWS)
        for col in range(BAG_GRID_COLS)
    ]
    for col, height in enumerate(_BAG_TOP_COLUMN_HEIGHTS):
        for offset in range(1, height + 1):
            layout.append(SlotPosition(_BAG_TOP_ROWS - offset, col))
    return tuple(layout)


BAG_SLOT_LAYOUT: Tuple[SlotPosition, ...] = _build_bag_layout()
BAG_SLOT_COUNT = len(BAG_SLOT_LAYOUT)

_BAG_POSITION_TO_SLOT: Dict[SlotPosition, SlotID] = {
    position: slot_id for slot_id, position in enumerate(BAG_SLOT_LAYOUT)
}


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def is_bag_container(container: Optional[Container]) -> bool:
    """Return True if ``container`` is a bag.

    A bag has ``bag`` in its id or ``canta`` in its display name.
    """
    if container is None:
        return False
    id_token = fold_token(container.id)
    name_token = fold_token(container.name)
    return "bag" in id_token or "canta" in name_token


def grid_dimensions(container: Container) -> Tuple[int, int]:
    """Return the visual ``(rows, cols)`` of ``container``."""
    if is_bag_container(container):
        return BAG_GRID_ROWS, BAG_GRID_COLS
    return container.rows, container.cols


def slot_index_of(container: Container, row: int, col: int) -> Optional[SlotID]:
    """Return the slot index at ``(row, col)`` or ``None`` if there is none."""
    if not (_is_index(row) and _is_index(col)):
        return None

    if is_bag_container(container):
        slot_id = _BAG_POSITION_TO_SLOT.get(SlotPosition(row, col))
    else:
        if row >= container.rows or col >= container.cols:
            return None
        slot_id = row * container.cols + col

    if slot_id is None or slot_id >= len(container.slots):
        return None
    return slot_id


def position_of(container: Container, slot_id: SlotID) -> Optional[SlotPosition]:
    """Return the grid coordinate of ``slot_id`` or ``None``.

    Rectangular containers may hold more slots than ``rows * cols`` after a
    schema change; those report rows past the grid so exports still place
    them, while :func:`slot_index_of` keeps to the declared geometry.
    """
    if not _is_index(slot_id) or slot_id >= len(container.slots):
        return None

    if is_bag_container(container):
        return BAG_SLOT_LAYOUT[slot_id] if slot_id < BAG_SLOT_COUNT else None

    if container.cols <= 0:
        return None
    return SlotPosition(slot_id // container.cols, slot_id % container.cols)


def occupied_slots(container: Container) -> Iterator[Tuple[Slot, SlotPosition]]:
    """Yield ``(slot, position)`` for every addressable occupied slot."""
    for slot in container.slots:
        if slot.item is None:
            continue
        position = position_of(container, slot.id)
        if position is not None:
            yield slot, position
