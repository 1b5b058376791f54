"""Copy-on-write path updates.

The inventory tree is a persistent structure: updating one slot rebuilds only
account → server → character → container → slot and shares every untouched
sibling by reference. Each level has a small ``with_*`` helper taking the
parent, an address and a function applied to the child.

All helpers return the parent *unchanged* (the same object) when the address
does not exist or the function returns the child unchanged, so callers can
detect a no-op with ``is``.
"""

from dataclasses import dataclass, replace
from typing import Callable, Optional, TypeVar

from pyrsistent.typing import PVector

from game_inventory.models import Account, Character, Container, Item, Server, Slot
from game_inventory.state import InventoryState
from game_inventory.types import CONTAINER_KEYS, AccountID, ContainerKey, SlotID

T = TypeVar("T")


@dataclass(frozen=True)
class CharacterRef:
    """Address of one character in an :class:`InventoryState`.

    Attributes:
        account_id: Owning account id.
        server_index: Index into ``Account.servers``.
        character_index: Index into ``Server.characters``.
    """

    account_id: AccountID
    server_index: int
    character_index: int


def replace_at(vector: PVector[T], index: int, fn: Callable[[T], T]) -> PVector[T]:
    """Apply ``fn`` to ``vector[index]``; out-of-range indexes are a no-op."""
    if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(vector):
        return vector
    current = vector[index]
    updated = fn(current)
    if updated is current:
        return vector
    return vector.set(index, updated)


def with_account(
    state: InventoryState, account_id: AccountID, fn: Callable[[Account], Account]
) -> InventoryState:
    index = state.account_index(account_id)
    if index is None:
        return state
    accounts = replace_at(state.accounts, index, fn)
    return state if accounts is state.accounts else replace(state, accounts=accounts)


def with_server(account: Account, server_index: int, fn: Callable[[Server], Server]) -> Account:
    servers = replace_at(account.servers, server_index, fn)
    return account if servers is account.servers else replace(account, servers=servers)


def with_character(
    server: Server, character_index: int, fn: Callable[[Character], Character]
) -> Server:
    characters = replace_at(server.characters, character_index, fn)
    return server if characters is server.characters else replace(server, characters=characters)


def with_container(
    character: Character, key: str, fn: Callable[[Container], Container]
) -> Character:
    container = container_of(character, key)
    if container is None:
        return character
    updated = fn(container)
    if updated is container:
        return character
    return replace(character, **{ContainerKey(key).value: updated})


def with_slot(container: Container, slot_id: SlotID, fn: Callable[[Slot], Slot]) -> Container:
    slots = replace_at(container.slots, slot_id, fn)
    return container if slots is container.slots else replace(container, slots=slots)


def update_character(
    state: InventoryState, ref: CharacterRef, fn: Callable[[Character], Character]
) -> InventoryState:
    """Apply ``fn`` to the character at ``ref`` and rebuild the path to it."""
    return with_account(
        state,
        ref.account_id,
        lambda acc: with_server(
            acc,
            ref.server_index,
            lambda server: with_character(server, ref.character_index, fn),
        ),
    )


def get_character(state: InventoryState, ref: CharacterRef) -> Optional[Character]:
    account = state.account(ref.account_id)
    if account is None or not 0 <= ref.server_index < len(account.servers):
        return None
    characters = account.servers[ref.server_index].characters
    if not 0 <= ref.character_index < len(characters):
        return None
    return characters[ref.character_index]


def container_of(character: Character, key: str) -> Optional[Container]:
    """Return the container attribute named ``key`` (``bank1``/``bank2``/``bag``)."""
    if key not in CONTAINER_KEYS:
        return None
    return getattr(character, ContainerKey(key).value)


def find_container_key(character: Character, container_id: str) -> Optional[ContainerKey]:
    """Resolve a container id (``char_0_bank1``) to its attribute key."""
    for key in CONTAINER_KEYS:
        if getattr(character, key.value).id == container_id:
            return key
    return None


def set_item(container: Container, slot_id: SlotID, item: Optional[Item]) -> Container:
    """Write ``item`` (or ``None``) into ``slot_id``."""
    return with_slot(
        container,
        slot_id,
        lambda slot: slot if slot.item is item else replace(slot, item=item),
    )
