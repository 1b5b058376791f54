"""Game-domain configuration data.

These lists are fixed by the game rather than derived: which categories form
an equipment set, which ones ignore gender or class, and the server roster
every account is created with.
"""

from typing import FrozenSet, Tuple

from game_inventory.types import ItemCategory

ALL_CLASSES = "Tüm Sınıflar"
ALL_GENDERS = "Tüm Cinsiyetler"

HERO_CLASSES: Tuple[str, ...] = ("Savaşçı", "Büyücü", "Şifacı")
GENDERS: Tuple[str, ...] = ("Erkek", "Kadın")

SERVER_NAMES: Tuple[str, ...] = ("Eminönü", "Galata", "Bab-ı Ali", "Beyaz Köşk", "Meran")
CHARACTERS_PER_SERVER = 4

BANK_ROWS = 8
BANK_COLS = 8

DEFAULT_ACCOUNT_NAME = "Account"
BANK1_NAME = "Bank 1"
BANK2_NAME = "Bank 2"
BAG_NAME = "Bag"
RECIPE_BOOK = "Recipe Book"

MIN_LEVEL = 1
MAX_LEVEL = 59

SET_CATEGORIES: Tuple[ItemCategory, ...] = (
    ItemCategory.WEAPON,
    ItemCategory.JACKET,
    ItemCategory.PANTS,
    ItemCategory.GLOVES,
    ItemCategory.SHOES,
    ItemCategory.ARMOR,
    ItemCategory.RING,
    ItemCategory.AMULET,
)

# Equipment that can be bound to a character.
BINDABLE_CATEGORIES: FrozenSet[ItemCategory] = frozenset(SET_CATEGORIES)

GENDERLESS_CATEGORIES: FrozenSet[ItemCategory] = frozenset(
    {
        ItemCategory.WEAPON,
        ItemCategory.RING,
        ItemCategory.AMULET,
        ItemCategory.TALISMAN,
        ItemCategory.POTION,
        ItemCategory.MINE,
        ItemCategory.OTHER,
    }
)

CLASSLESS_CATEGORIES: FrozenSet[ItemCategory] = frozenset(
    {
        ItemCategory.GLASSES,
        ItemCategory.RING,
        ItemCategory.AMULET,
        ItemCategory.POTION,
        ItemCategory.MINE,
        ItemCategory.OTHER,
    }
)

TALISMAN_GLOW_COLORS: Tuple[str, ...] = (
    "#06b6d4",
    "#ef4444",
    "#84cc16",
    "#8b5cf6",
    "#f59e0b",
    "#ec4899",
    "#0ea5e9",
    "#10b981",
    "#f43f5e",
    "#f97316",
)
