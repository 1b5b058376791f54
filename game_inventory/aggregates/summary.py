"""Inventory totals.

Item and recipe counts per account, broken down by category. Stack sizes are
not summed: one occupied slot counts as one item.
"""

from dataclasses import dataclass
from typing import Dict, Iterable

from pyrsistent import PMap, pmap

from game_inventory.models import Account
from game_inventory.types import CONTAINER_KEYS, ItemCategory
from game_inventory.utils.item import canonical_category


@dataclass(frozen=True)
class InventorySummary:
    """Totals for one or more accounts.

    Attributes:
        item_count: Occupied slots across all containers.
        recipe_count: Learned (read) recipes.
        by_category: Occupied slots per category; unknown categories count
            as ``Other``.
    """

    item_count: int = 0
    recipe_count: int = 0
    by_category: PMap[str, int] = pmap()


def summarize_accounts(accounts: Iterable[Account]) -> InventorySummary:
    items = 0
    recipes = 0
    by_category: Dict[str, int] = {}
    for account in accounts:
        for server in account.servers:
            for character in server.characters:
                recipes += len(character.learned_recipes)
                for key in CONTAINER_KEYS:
                    for slot in getattr(character, key.value).slots:
                        if slot.item is None:
                            continue
                        items += 1
                        category = canonical_category(slot.item.category) or ItemCategory.OTHER
                        by_category[category.value] = by_category.get(category.value, 0) + 1
    return InventorySummary(item_count=items, recipe_count=recipes, by_category=pmap(by_category))


def summarize_account(account: Account) -> InventorySummary:
    return summarize_accounts((account,))
