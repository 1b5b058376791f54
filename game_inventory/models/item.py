"""Item value object.

An ``Item`` is whatever occupies a slot (or a character's recipe book). It is
immutable; edits produce a new instance via ``dataclasses.replace``. Identity
is the opaque ``id`` string, unique across the whole account tree.
"""

from dataclasses import dataclass
from typing import Optional

from game_inventory.constants import ALL_CLASSES, ALL_GENDERS
from game_inventory.types import ItemID, ItemType, TalismanTier


@dataclass(frozen=True)
class Item:
    """Single inventory entry.

    Attributes:
        id: Opaque, globally unique identifier.
        type: ``Item`` or ``Recipe``.
        category: One of :class:`game_inventory.types.ItemCategory` for
            normalized data; raw strings are tolerated everywhere.
        enchantment1: Primary enchantment (talisman name for talismans).
        enchantment2: Secondary enchantment. Older talisman records carry the
            colour and tier here as free text.
        talisman_tier: Structured talisman tier, when recorded.
        hero_class: Concrete class or the ``ALL_CLASSES`` sentinel.
        gender: Concrete gender or the ``ALL_GENDERS`` sentinel.
        level: Required level, 1..59.
        count: Stack size.
        weapon_type: Free-text weapon kind, weapons only.
        is_read: Recipe has been read into the recipe book.
        is_global: Visible in global search.
        is_bound: Character-bound equipment.
    """

    id: ItemID
    type: str = ItemType.ITEM
    category: str = ""
    enchantment1: str = ""
    enchantment2: str = ""
    talisman_tier: Optional[TalismanTier] = None
    hero_class: str = ALL_CLASSES
    gender: str = ALL_GENDERS
    level: int = 1
    count: int = 1
    weapon_type: Optional[str] = None
    is_read: bool = False
    is_global: bool = False
    is_bound: bool = False
