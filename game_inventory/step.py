"""State reducer.

:func:`step` is the only mutation entry point for the inventory tree. It is
pure: it returns a *new* :class:`~game_inventory.state.InventoryState` and
rebuilds only the path to the edited node (see :mod:`game_inventory.tree`).

An action that does not apply (unknown account, slot index outside the
container, empty slot for ``ReadRecipe``, ...) returns the input state object
unchanged, so ``next_state is state`` tells the caller nothing needs saving.
Persistence is the caller's job and happens after the step.
"""

import logging
from dataclasses import replace
from typing import Callable, Optional

from pyrsistent import pvector

from game_inventory.actions import (
    Action,
    AddAccount,
    CraftTalismans,
    DeleteAccount,
    EditRecipe,
    MoveAccount,
    MoveItem,
    ReadRecipe,
    RenameAccount,
    RenameCharacter,
    SaveItem,
    SetSlotItem,
    UnlearnRecipe,
)
from game_inventory.aggregates.talismans import consume_talismans
from game_inventory.config import DEFAULT_CONFIG, InventoryConfig
from game_inventory.factories import create_account, new_id
from game_inventory.models import Character, Container, Item
from game_inventory.state import InventoryState
from game_inventory.tree import (
    CharacterRef,
    container_of,
    set_item,
    update_character,
    with_container,
)
from game_inventory.types import ItemType, SlotID
from game_inventory.utils.item import is_read_recipe
from game_inventory.utils.text import clean_text

log = logging.getLogger(__name__)


def step(
    state: InventoryState, action: Action, config: InventoryConfig = DEFAULT_CONFIG
) -> InventoryState:
    """Apply one user action.

    Args:
        state (InventoryState): Current snapshot.
        action (Action): Action dataclass from :mod:`game_inventory.actions`.
        config (InventoryConfig): Limits and defaults for account creation.

    Returns:
        InventoryState: Next snapshot, or ``state`` itself when the action
            does not apply.

    Raises:
        ValueError: If ``action`` is not a known action type.
    """
    if isinstance(action, SetSlotItem):
        return _on_character(state, action.ref, lambda c: _set_slot(c, action))
    if isinstance(action, SaveItem):
        return _on_character(state, action.ref, lambda c: _save_item(c, action))
    if isinstance(action, MoveItem):
        return _on_character(state, action.ref, lambda c: _move_item(c, action))
    if isinstance(action, ReadRecipe):
        return _on_character(state, action.ref, lambda c: _read_recipe(c, action))
    if isinstance(action, UnlearnRecipe):
        return _on_character(state, action.ref, lambda c: _unlearn(c, action.recipe_id))
    if isinstance(action, EditRecipe):
        return _on_character(state, action.ref, lambda c: _edit_recipe(c, action.item))
    if isinstance(action, CraftTalismans):
        return _on_character(state, action.ref, lambda c: consume_talismans(c, action.item))
    if isinstance(action, RenameCharacter):
        return _on_character(state, action.ref, lambda c: _rename(c, action.name))
    if isinstance(action, AddAccount):
        return _add_account(state, action, config)
    if isinstance(action, DeleteAccount):
        return _delete_account(state, action)
    if isinstance(action, RenameAccount):
        return _rename_account(state, action)
    if isinstance(action, MoveAccount):
        return _move_account(state, action)
    raise ValueError(f"Unknown action: {action!r}")


def _on_character(
    state: InventoryState, ref: CharacterRef, fn: Callable[[Character], Character]
) -> InventoryState:
    return update_character(state, ref, fn)


# -------- Slot actions --------


def _without_recipe(character: Character, item_id: str) -> Character:
    recipes = character.learned_recipes
    kept = [recipe for recipe in recipes if recipe.id != item_id]
    if len(kept) == len(recipes):
        return character
    return replace(character, learned_recipes=pvector(kept))


def _valid_slot(container: Container, slot_id: SlotID) -> bool:
    return (
        isinstance(slot_id, int)
        and not isinstance(slot_id, bool)
        and 0 <= slot_id < len(container.slots)
    )


def _slot_item(container: Container, slot_id: SlotID) -> Optional[Item]:
    if not _valid_slot(container, slot_id):
        return None
    return container.slots[slot_id].item


def _write_slot(character: Character, key: str, slot_id: SlotID, item: Optional[Item]) -> Character:
    container = container_of(character, key)
    if container is None or not _valid_slot(container, slot_id):
        return character
    updated = with_container(character, key, lambda c: set_item(c, slot_id, item))
    if item is not None and updated is not character:
        updated = _without_recipe(updated, item.id)
    return updated


def _set_slot(character: Character, action: SetSlotItem) -> Character:
    return _write_slot(character, action.container, action.slot_id, action.item)


def _learn(character: Character, recipe: Item) -> Character:
    recipe = replace(recipe, type=ItemType.RECIPE, is_read=True)
    recipes = character.learned_recipes
    for index, existing in enumerate(recipes):
        if existing.id == recipe.id:
            return replace(character, learned_recipes=recipes.set(index, recipe))
    return replace(character, learned_recipes=recipes.append(recipe))


def _save_item(character: Character, action: SaveItem) -> Character:
    if not is_read_recipe(action.item):
        return _write_slot(character, action.container, action.slot_id, action.item)
    container = container_of(character, action.container)
    if container is None or not _valid_slot(container, action.slot_id):
        return character
    cleared = with_container(character, action.container, lambda c: set_item(c, action.slot_id, None))
    return _learn(cleared, action.item)


def _move_item(character: Character, action: MoveItem) -> Character:
    container = container_of(character, action.container)
    if container is None or action.from_slot == action.to_slot:
        return character
    if not (_valid_slot(container, action.from_slot) and _valid_slot(container, action.to_slot)):
        return character
    item_from = container.slots[action.from_slot].item
    item_to = container.slots[action.to_slot].item

    def swap(c: Container) -> Container:
        return set_item(set_item(c, action.to_slot, item_from), action.from_slot, item_to)

    return with_container(character, action.container, swap)


def _read_recipe(character: Character, action: ReadRecipe) -> Character:
    container = container_of(character, action.container)
    if container is None:
        return character
    item = _slot_item(container, action.slot_id)
    if item is None or item.type != ItemType.RECIPE:
        return character
    cleared = with_container(character, action.container, lambda c: set_item(c, action.slot_id, None))
    return _learn(cleared, item)


def _unlearn(character: Character, recipe_id: str) -> Character:
    return _without_recipe(character, recipe_id)


def _edit_recipe(character: Character, item: Item) -> Character:
    if not any(recipe.id == item.id for recipe in character.learned_recipes):
        return character
    return _learn(character, item)


def _rename(character: Character, name: str) -> Character:
    name = clean_text(name)
    if not name or name == character.name:
        return character
    return replace(character, name=name)


# -------- Account actions --------


def _add_account(state: InventoryState, action: AddAccount, config: InventoryConfig) -> InventoryState:
    if len(state.accounts) >= config.max_accounts:
        log.info("Account limit of %d reached; not adding", config.max_accounts)
        return state
    account_id = action.account_id or new_id()
    if state.account(account_id) is not None:
        return state
    name = clean_text(action.name) or f"Account {len(state.accounts) + 1}"
    account = create_account(account_id, name, config)
    return replace(state, accounts=state.accounts.append(account))


def _delete_account(state: InventoryState, action: DeleteAccount) -> InventoryState:
    index = state.account_index(action.account_id)
    if index is None or len(state.accounts) <= 1:
        return state
    return replace(state, accounts=state.accounts.delete(index))


def _rename_account(state: InventoryState, action: RenameAccount) -> InventoryState:
    index = state.account_index(action.account_id)
    name = clean_text(action.name)
    if index is None or not name or state.accounts[index].name == name:
        return state
    return replace(
        state, accounts=state.accounts.set(index, replace(state.accounts[index], name=name))
    )


def _move_account(state: InventoryState, action: MoveAccount) -> InventoryState:
    index = state.account_index(action.account_id)
    if index is None:
        return state
    target = index + action.offset
    if target == index or not 0 <= target < len(state.accounts):
        return state
    accounts = list(state.accounts)
    accounts.insert(target, accounts.pop(index))
    return replace(state, accounts=pvector(accounts))
