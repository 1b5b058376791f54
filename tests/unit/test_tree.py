# tests/unit/test_tree.py

from dataclasses import replace

from game_inventory.tree import (
    CharacterRef,
    container_of,
    find_container_key,
    get_character,
    replace_at,
    set_item,
    update_character,
)
from game_inventory.types import ContainerKey, ItemCategory
from pyrsistent import pvector

from tests.test_utils import REF, character_at, make_item, make_state, put_item


def test_update_shares_untouched_siblings() -> None:
    state = make_state("acc-0", "acc-1")
    next_state = put_item(state, make_item(ItemCategory.RING, "Fire"), 5)

    assert next_state is not state
    assert next_state.accounts[1] is state.accounts[1]

    old_account, new_account = state.accounts[0], next_state.accounts[0]
    assert new_account.servers[1] is old_account.servers[1]
    old_server, new_server = old_account.servers[0], new_account.servers[0]
    assert new_server.characters[1] is old_server.characters[1]

    old_char, new_char = old_server.characters[0], new_server.characters[0]
    assert new_char.bank2 is old_char.bank2
    assert new_char.bag is old_char.bag
    assert new_char.bank1.slots[4] is old_char.bank1.slots[4]
    assert new_char.bank1.slots[5].item is not None


def test_previous_state_is_unchanged() -> None:
    state = make_state()
    put_item(state, make_item(), 0)
    assert all(slot.item is None for slot in character_at(state).bank1.slots)


def test_missing_addresses_are_noops() -> None:
    state = make_state()
    item = make_item()
    for ref in (
        CharacterRef("nobody", 0, 0),
        CharacterRef(REF.account_id, 99, 0),
        CharacterRef(REF.account_id, 0, 99),
        CharacterRef(REF.account_id, -1, 0),
    ):
        assert update_character(state, ref, lambda c: replace(c, name="x")) is state
        assert put_item(state, item, 0, ref=ref) is state


def test_unchanged_child_keeps_parent_identity() -> None:
    state = make_state()
    assert update_character(state, REF, lambda c: c) is state
    bank = character_at(state).bank1
    assert set_item(bank, 3, None) is bank
    assert set_item(bank, 500, make_item()) is bank


def test_replace_at_bounds() -> None:
    vector = pvector([1, 2, 3])
    assert replace_at(vector, 3, lambda v: v + 1) is vector
    assert replace_at(vector, True, lambda v: v + 1) is vector
    assert replace_at(vector, 1, lambda v: v + 1) == pvector([1, 3, 3])


def test_container_lookup() -> None:
    character = character_at(make_state())
    assert container_of(character, "bag") is character.bag
    assert container_of(character, ContainerKey.BANK2) is character.bank2
    assert container_of(character, "attic") is None
    assert find_container_key(character, character.bank2.id) == ContainerKey.BANK2
    assert find_container_key(character, "missing") is None
    assert get_character(make_state(), CharacterRef("nobody", 0, 0)) is None
