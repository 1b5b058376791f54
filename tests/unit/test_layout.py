# tests/unit/test_layout.py

from dataclasses import replace

import pytest

from game_inventory.factories import create_bag, create_bank, create_empty_slots
from game_inventory.layout import (
    BAG_GRID_COLS,
    BAG_GRID_ROWS,
    BAG_SLOT_COUNT,
    BAG_SLOT_LAYOUT,
    SlotPosition,
    grid_dimensions,
    is_bag_container,
    position_of,
    slot_index_of,
)


def test_bank_affine_mapping() -> None:
    bank = create_bank(0, "bank1", "Bank 1")
    assert (bank.rows, bank.cols, len(bank.slots)) == (8, 8, 64)
    assert slot_index_of(bank, 0, 0) == 0
    assert slot_index_of(bank, 2, 3) == 19
    assert slot_index_of(bank, 7, 7) == 63
    assert position_of(bank, 19) == SlotPosition(2, 3)


def test_bank_round_trip_every_slot() -> None:
    bank = create_bank(0, "bank2", "Bank 2")
    for slot in bank.slots:
        position = position_of(bank, slot.id)
        assert position is not None
        assert slot_index_of(bank, position.row, position.col) == slot.id


@pytest.mark.parametrize(
    "row, col",
    [(8, 0), (0, 8), (-1, 0), (0, -1), (1.5, 0), (True, 0), ("1", 1), (None, 0)],
)
def test_bank_rejects_out_of_grid_and_non_int(row: object, col: object) -> None:
    bank = create_bank(0, "bank1", "Bank 1")
    assert slot_index_of(bank, row, col) is None  # type: ignore[arg-type]


def test_bank_short_slot_vector_is_bounded_by_length() -> None:
    bank = replace(create_bank(0, "bank1", "Bank 1"), slots=create_empty_slots(10))
    assert slot_index_of(bank, 1, 1) == 9
    assert slot_index_of(bank, 1, 2) is None
    assert position_of(bank, 10) is None


def test_position_past_declared_grid_for_extra_slots() -> None:
    bank = replace(create_bank(0, "bank1", "Bank 1"), slots=create_empty_slots(72))
    assert position_of(bank, 70) == SlotPosition(8, 6)
    # addressing stays within the declared geometry
    assert slot_index_of(bank, 8, 6) is None


def test_bag_layout_shape() -> None:
    assert BAG_SLOT_COUNT == 33
    assert (BAG_GRID_ROWS, BAG_GRID_COLS) == (10, 4)
    assert len(set(BAG_SLOT_LAYOUT)) == BAG_SLOT_COUNT
    for position in BAG_SLOT_LAYOUT:
        assert 0 <= position.row < BAG_GRID_ROWS
        assert 0 <= position.col < BAG_GRID_COLS


def test_bag_base_block_and_top_columns() -> None:
    assert BAG_SLOT_LAYOUT[0] == SlotPosition(4, 0)
    assert BAG_SLOT_LAYOUT[23] == SlotPosition(9, 3)
    # column heights 3, 4, 2 stacked upward from row 3
    assert BAG_SLOT_LAYOUT[24:27] == (SlotPosition(3, 0), SlotPosition(2, 0), SlotPosition(1, 0))
    assert BAG_SLOT_LAYOUT[27:31] == (
        SlotPosition(3, 1),
        SlotPosition(2, 1),
        SlotPosition(1, 1),
        SlotPosition(0, 1),
    )
    assert BAG_SLOT_LAYOUT[31:] == (SlotPosition(3, 2), SlotPosition(2, 2))


def test_bag_round_trip_every_slot() -> None:
    bag = create_bag(0)
    for slot_id in range(BAG_SLOT_COUNT):
        position = position_of(bag, slot_id)
        assert position is not None
        assert slot_index_of(bag, position.row, position.col) == slot_id


@pytest.mark.parametrize("row, col", [(0, 0), (0, 3), (3, 3), (1, 2), (10, 0), (4, 4)])
def test_bag_holes_are_not_addressable(row: int, col: int) -> None:
    assert slot_index_of(create_bag(0), row, col) is None


def test_bag_slots_past_layout_have_no_position() -> None:
    bag = replace(create_bag(0), slots=create_empty_slots(BAG_SLOT_COUNT + 2))
    assert position_of(bag, BAG_SLOT_COUNT) is None
    assert position_of(bag, BAG_SLOT_COUNT - 1) == BAG_SLOT_LAYOUT[-1]


def test_bag_recognition_by_id_or_name() -> None:
    bag = create_bag(3)
    bank = create_bank(3, "bank1", "Bank 1")
    assert is_bag_container(bag)
    assert not is_bag_container(bank)
    assert is_bag_container(replace(bank, id="x", name="Çanta"))
    assert not is_bag_container(replace(bank, name="Bagaj"))
    assert not is_bag_container(None)
    assert grid_dimensions(bag) == (BAG_GRID_ROWS, BAG_GRID_COLS)
    assert grid_dimensions(bank) == (8, 8)
