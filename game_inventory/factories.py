"""Default entity constructors.

Each helper returns a fresh, fully populated entity with empty containers.
The normalizer builds these as the fallback for any missing or malformed
field, so their shape is the canonical shape.
"""

import uuid
from typing import Optional

from pyrsistent import pvector
from pyrsistent.typing import PVector

from game_inventory.config import DEFAULT_CONFIG, InventoryConfig
from game_inventory.constants import (
    BAG_NAME,
    BANK1_NAME,
    BANK2_NAME,
    DEFAULT_ACCOUNT_NAME,
    SERVER_NAMES,
)
from game_inventory.layout import BAG_GRID_COLS, BAG_GRID_ROWS, BAG_SLOT_COUNT
from game_inventory.models import Account, Character, Container, Server, Slot


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid.uuid4().hex


def create_empty_slots(count: int) -> PVector[Slot]:
    return pvector(Slot(id=i) for i in range(count))


def create_bank(
    char_index: int, key: str, name: str, config: InventoryConfig = DEFAULT_CONFIG
) -> Container:
    return Container(
        id=f"char_{char_index}_{key}",
        name=name,
        rows=config.bank_rows,
        cols=config.bank_cols,
        slots=create_empty_slots(config.bank_rows * config.bank_cols),
    )


def create_bag(char_index: int) -> Container:
    return Container(
        id=f"char_{char_index}_bag",
        name=BAG_NAME,
        rows=BAG_GRID_ROWS,
        cols=BAG_GRID_COLS,
        slots=create_empty_slots(BAG_SLOT_COUNT),
    )


def create_character(char_index: int, config: InventoryConfig = DEFAULT_CONFIG) -> Character:
    """Character ``char_index`` with two empty banks and an empty bag."""
    return Character(
        id=char_index,
        name=f"Character {char_index + 1}",
        bank1=create_bank(char_index, "bank1", BANK1_NAME, config),
        bank2=create_bank(char_index, "bank2", BANK2_NAME, config),
        bag=create_bag(char_index),
    )


def create_characters(config: InventoryConfig = DEFAULT_CONFIG) -> PVector[Character]:
    return pvector(create_character(i, config) for i in range(config.characters_per_server))


def server_id(account_id: str, index: int) -> str:
    return f"{account_id}_server_{index}"


def server_name(index: int) -> str:
    """Roster name for server ``index`` (generic name past the roster)."""
    if 0 <= index < len(SERVER_NAMES):
        return SERVER_NAMES[index]
    return f"Server {index + 1}"


def create_server(
    id: str, name: str, config: InventoryConfig = DEFAULT_CONFIG
) -> Server:
    return Server(id=id, name=name, characters=create_characters(config))


def create_account(
    id: Optional[str] = None,
    name: str = DEFAULT_ACCOUNT_NAME,
    config: InventoryConfig = DEFAULT_CONFIG,
) -> Account:
    """Account with one default server per roster entry."""
    account_id = id if id is not None else new_id()
    return Account(
        id=account_id,
        name=name,
        servers=pvector(
            create_server(server_id(account_id, idx), server_name(idx), config)
            for idx in range(len(SERVER_NAMES))
        ),
    )
