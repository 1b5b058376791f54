"""Inventory tree value objects.

Account → Server → Character → Container → Slot → Item, each an immutable
dataclass. Sequences are ``pyrsistent`` vectors so an update rebuilds only the
path from the root to the changed node while untouched siblings are shared by
reference (see :mod:`game_inventory.tree`).
"""

from .account import Account
from .character import Character
from .container import Container
from .item import Item
from .server import Server
from .slot import Slot

__all__ = [
    "Account",
    "Character",
    "Container",
    "Item",
    "Server",
    "Slot",
]
