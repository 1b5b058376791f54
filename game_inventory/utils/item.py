"""Item classification helpers.

Pure predicates over :class:`game_inventory.models.Item` that every consumer
shares: category resolution (including legacy labels), the class/gender
sentinels and their matching rule.
"""

from typing import Any, Optional

from game_inventory.constants import (
    ALL_CLASSES,
    ALL_GENDERS,
    BINDABLE_CATEGORIES,
    CLASSLESS_CATEGORIES,
    GENDERLESS_CATEGORIES,
    SET_CATEGORIES,
)
from game_inventory.models import Item
from game_inventory.types import CATEGORY_ALIASES, ItemCategory, ItemType
from game_inventory.utils.text import clean_text, fold_token

_CATEGORY_BY_TOKEN = {fold_token(c.value): c for c in ItemCategory}
_CATEGORY_BY_TOKEN.update(CATEGORY_ALIASES)

_ALL_CLASSES_TOKENS = {fold_token(ALL_CLASSES), "all classes", "all"}
_ALL_GENDERS_TOKENS = {fold_token(ALL_GENDERS), "all genders", "all"}


def canonical_category(value: Any) -> Optional[ItemCategory]:
    """Return the ``ItemCategory`` for ``value`` (canonical or legacy label)."""
    return _CATEGORY_BY_TOKEN.get(fold_token(value))


def is_all_classes(value: Any) -> bool:
    return fold_token(value) in _ALL_CLASSES_TOKENS


def is_all_genders(value: Any) -> bool:
    return fold_token(value) in _ALL_GENDERS_TOKENS


def class_matches(item_class: str, target_class: str) -> bool:
    """Equal classes match, and the sentinel on either side matches anything."""
    return item_class == target_class or is_all_classes(item_class) or is_all_classes(target_class)


def gender_matches(item_gender: str, target_gender: str) -> bool:
    return (
        item_gender == target_gender
        or is_all_genders(item_gender)
        or is_all_genders(target_gender)
    )


def is_category(item: Item, category: ItemCategory) -> bool:
    return canonical_category(item.category) == category


def has_primary_enchantment(item: Item) -> bool:
    return clean_text(item.enchantment1) != ""


def is_set_eligible(item: Item) -> bool:
    """Equipment-set candidate: set category with a non-empty primary enchantment."""
    return canonical_category(item.category) in SET_CATEGORIES and has_primary_enchantment(item)


def is_bindable(item: Item) -> bool:
    return item.type == ItemType.ITEM and canonical_category(item.category) in BINDABLE_CATEGORIES


def is_genderless(category: Optional[ItemCategory]) -> bool:
    return category in GENDERLESS_CATEGORIES


def is_classless(category: Optional[ItemCategory]) -> bool:
    return category in CLASSLESS_CATEGORIES


def is_read_recipe(item: Item) -> bool:
    return item.type == ItemType.RECIPE and item.is_read
