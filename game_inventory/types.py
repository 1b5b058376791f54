"""Common type aliases and enumerations.

The canonical vocabulary of the inventory model. Persisted documents written
by older clients used Turkish labels for categories, tiers and colours; the
alias tables here map those onto the canonical ``StrEnum`` members so every
consumer can compare against one spelling.
"""

from enum import StrEnum
from typing import Dict

ItemID = str
AccountID = str
ServerID = str
ContainerID = str
SlotID = int


class ItemType(StrEnum):
    """Whether a slot holds a usable item or an (unread) recipe."""

    ITEM = "Item"
    RECIPE = "Recipe"


class ItemCategory(StrEnum):
    """Fixed category enumeration shared by every item."""

    WEAPON = "Weapon"
    JACKET = "Jacket"
    PANTS = "Pants"
    GLOVES = "Gloves"
    SHOES = "Shoes"
    GLASSES = "Glasses"
    ARMOR = "Armor"
    RING = "Ring"
    AMULET = "Amulet"
    MINE = "Mine"
    POTION = "Potion"
    TALISMAN = "Talisman"
    OTHER = "Other"


class TalismanTier(StrEnum):
    """Talisman crafting tier. ``NONE`` marks an untiered talisman."""

    NONE = "-"
    I = "I"  # noqa: E741
    II = "II"
    III = "III"


class TalismanColor(StrEnum):
    BLUE = "Blue"
    RED = "Red"


class ContainerKey(StrEnum):
    """Attribute names of the three containers every character owns."""

    BANK1 = "bank1"
    BANK2 = "bank2"
    BAG = "bag"


CONTAINER_KEYS = (ContainerKey.BANK1, ContainerKey.BANK2, ContainerKey.BAG)

# Legacy labels, keyed by their folded token (see utils.text.fold_token).
CATEGORY_ALIASES: Dict[str, ItemCategory] = {
    "silah": ItemCategory.WEAPON,
    "ceket": ItemCategory.JACKET,
    "pantolon": ItemCategory.PANTS,
    "eldiven": ItemCategory.GLOVES,
    "ayakkabi": ItemCategory.SHOES,
    "gozluk": ItemCategory.GLASSES,
    "zirh": ItemCategory.ARMOR,
    "yuzuk": ItemCategory.RING,
    "kolye": ItemCategory.AMULET,
    "necklace": ItemCategory.AMULET,
    "maden": ItemCategory.MINE,
    "iksir": ItemCategory.POTION,
    "tilsim": ItemCategory.TALISMAN,
    "diger": ItemCategory.OTHER,
}

COLOR_ALIASES: Dict[str, TalismanColor] = {
    "blue": TalismanColor.BLUE,
    "mavi": TalismanColor.BLUE,
    "red": TalismanColor.RED,
    "kirmizi": TalismanColor.RED,
}

TIER_ALIASES: Dict[str, TalismanTier] = {
    "-": TalismanTier.NONE,
    "i": TalismanTier.I,
    "ii": TalismanTier.II,
    "iii": TalismanTier.III,
    "1": TalismanTier.I,
    "2": TalismanTier.II,
    "3": TalismanTier.III,
}
