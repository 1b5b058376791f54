"""User actions.

Every edit a user can make to the inventory is a small frozen dataclass
consumed by :func:`game_inventory.step.step`. Character-level actions carry a
:class:`~game_inventory.tree.CharacterRef`; containers are named by their
attribute key (``bank1``, ``bank2``, ``bag``) and slots by index.
"""

from dataclasses import dataclass
from typing import Optional, Union

from game_inventory.models import Item
from game_inventory.tree import CharacterRef
from game_inventory.types import AccountID, ContainerKey, ItemID, SlotID


@dataclass(frozen=True)
class SetSlotItem:
    """Write ``item`` into a slot; ``item=None`` deletes the slot's item."""

    ref: CharacterRef
    container: ContainerKey
    slot_id: SlotID
    item: Optional[Item]


@dataclass(frozen=True)
class SaveItem:
    """Save an edited item. A read recipe goes to the recipe book instead."""

    ref: CharacterRef
    container: ContainerKey
    slot_id: SlotID
    item: Item


@dataclass(frozen=True)
class MoveItem:
    """Swap the contents of two slots of one container."""

    ref: CharacterRef
    container: ContainerKey
    from_slot: SlotID
    to_slot: SlotID


@dataclass(frozen=True)
class ReadRecipe:
    """Move the recipe in a slot into the character's recipe book."""

    ref: CharacterRef
    container: ContainerKey
    slot_id: SlotID


@dataclass(frozen=True)
class UnlearnRecipe:
    ref: CharacterRef
    recipe_id: ItemID


@dataclass(frozen=True)
class EditRecipe:
    """Replace the learned recipe with ``item.id``."""

    ref: CharacterRef
    item: Item


@dataclass(frozen=True)
class CraftTalismans:
    """Consume the first three talismans of ``item``'s duplicate group."""

    ref: CharacterRef
    item: Item


@dataclass(frozen=True)
class AddAccount:
    name: Optional[str] = None
    account_id: Optional[AccountID] = None


@dataclass(frozen=True)
class DeleteAccount:
    account_id: AccountID


@dataclass(frozen=True)
class RenameAccount:
    account_id: AccountID
    name: str


@dataclass(frozen=True)
class RenameCharacter:
    ref: CharacterRef
    name: str


@dataclass(frozen=True)
class MoveAccount:
    """Shift an account ``offset`` places in display order (-1 up, +1 down)."""

    account_id: AccountID
    offset: int


Action = Union[
    SetSlotItem,
    SaveItem,
    MoveItem,
    ReadRecipe,
    UnlearnRecipe,
    EditRecipe,
    CraftTalismans,
    AddAccount,
    DeleteAccount,
    RenameAccount,
    RenameCharacter,
    MoveAccount,
]
