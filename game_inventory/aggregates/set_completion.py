"""Set-completion lookup.

Equipment items sharing the same pair of enchantments form a set. Across
*every* account in the snapshot, this module works out which gender/class
combinations already own which set categories, so the presentation layer can
say "this item belongs to a known set" and "you are still missing X".

Algorithm:

1. Collect set-eligible items (set category, non-empty primary enchantment)
   from every container slot and every learned recipe, with their location.
2. Group them by :func:`enchantment_pair_key`, which ignores the order and
   the letter case in which the two enchantments were typed in. Every
   spelling of an enchantment maps onto the first spelling seen, so
   ``("fire", "ICE")`` joins the ``FireIce`` set when ``Fire``/``Ice`` came first.
3. Per group, take the genders and classes actually observed in that group.
4. For each observed (gender, class) pair, the compatible entries are those
   whose gender and class equal the target or carry the "all" sentinel.
   Their distinct categories are the coverage for key ``pair|gender|class``.

The lookup is rebuilt from scratch; :func:`set_lookup` memoizes it on the
identity of the accounts vector.
"""

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from pyrsistent import PMap, pmap, pvector
from pyrsistent.typing import PVector

from game_inventory.constants import RECIPE_BOOK, SET_CATEGORIES
from game_inventory.layout import occupied_slots
from game_inventory.models import Account, Item
from game_inventory.state import InventoryState
from game_inventory.types import CONTAINER_KEYS, ItemCategory
from game_inventory.utils.item import (
    canonical_category,
    class_matches,
    gender_matches,
    is_set_eligible,
)
from game_inventory.utils.memo import memoize_last
from game_inventory.utils.text import clean_text, fold_token

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetItemLocation:
    """Where a set-eligible item lives.

    Recipe-book entries use ``container_name == RECIPE_BOOK``, ``row`` is the
    index in the book and ``col`` is 0.
    """

    account_name: str
    server_name: str
    character_name: str
    container_name: str
    row: int
    col: int
    category: str
    item: Item


@dataclass(frozen=True)
class GlobalSetInfo:
    """Coverage of one ``pair|gender|class`` key."""

    count: int
    categories: FrozenSet[str]


@dataclass(frozen=True)
class SetLookup:
    """Read-only aggregate outputs.

    Attributes:
        lookup: Key → coverage.
        locations: Key → contributing item locations, for drill-down.
        spellings: Folded enchantment token → the spelling used in keys.
    """

    lookup: PMap[str, GlobalSetInfo] = pmap()
    locations: PMap[str, PVector[SetItemLocation]] = pmap()
    spellings: PMap[str, str] = pmap()


def enchantment_pair_key(
    enchantment1: object,
    enchantment2: object,
    spellings: Optional[Mapping[str, str]] = None,
) -> str:
    """Order-independent identifier of an enchantment pair.

    ``("Fire", "Ice")`` and ``("Ice", "Fire")`` both give ``"FireIce"``. With
    ``spellings`` (folded token → spelling), each enchantment is written the
    way the mapping says, which makes the key case-insensitive as well.
    """
    pair = sorted(
        (clean_text(enchantment1), clean_text(enchantment2)),
        key=lambda value: (fold_token(value), value),
    )
    if spellings:
        pair = [spellings.get(fold_token(value), value) for value in pair]
    return "".join(pair)


def set_key(pair_key: str, gender: str, hero_class: str) -> str:
    return f"{pair_key}|{gender}|{hero_class}"


def set_key_for_item(
    item: Item,
    gender: Optional[str] = None,
    hero_class: Optional[str] = None,
    lookup: Optional[SetLookup] = None,
) -> str:
    """Lookup key of ``item``'s set, optionally for another gender/class.

    Pass the ``lookup`` the key is meant for so differently cased
    enchantments resolve to the spelling that lookup uses.
    """
    return set_key(
        enchantment_pair_key(
            item.enchantment1,
            item.enchantment2,
            lookup.spellings if lookup is not None else None,
        ),
        gender if gender is not None else item.gender,
        hero_class if hero_class is not None else item.hero_class,
    )


def collect_set_entries(accounts: Iterable[Account]) -> List[SetItemLocation]:
    """Return every set-eligible item in ``accounts`` with its location."""
    entries: List[SetItemLocation] = []
    for account in accounts:
        for server in account.servers:
            for character in server.characters:
                where = (account.name, server.name, character.name)
                for key in CONTAINER_KEYS:
                    container = getattr(character, key.value)
                    for slot, position in occupied_slots(container):
                        item = slot.item
                        if item is None or not is_set_eligible(item):
                            continue
                        entries.append(
                            _location(where, container.name, position.row, position.col, item)
                        )
                for index, recipe in enumerate(character.learned_recipes):
                    if is_set_eligible(recipe):
                        entries.append(_location(where, RECIPE_BOOK, index, 0, recipe))
    return entries


def _location(
    where: Tuple[str, str, str], container_name: str, row: int, col: int, item: Item
) -> SetItemLocation:
    category = canonical_category(item.category)
    return SetItemLocation(
        account_name=where[0],
        server_name=where[1],
        character_name=where[2],
        container_name=container_name,
        row=row,
        col=col,
        category=category.value if category is not None else item.category,
        item=item,
    )


def build_set_lookup(accounts: Iterable[Account]) -> SetLookup:
    """Rebuild the full set-completion lookup for ``accounts``."""
    entries = collect_set_entries(accounts)

    spellings: Dict[str, str] = {}
    for entry in entries:
        for value in (entry.item.enchantment1, entry.item.enchantment2):
            spellings.setdefault(fold_token(value), clean_text(value))

    groups: Dict[str, List[SetItemLocation]] = {}
    for entry in entries:
        pair = enchantment_pair_key(entry.item.enchantment1, entry.item.enchantment2, spellings)
        groups.setdefault(pair, []).append(entry)

    lookup: Dict[str, GlobalSetInfo] = {}
    locations: Dict[str, PVector[SetItemLocation]] = {}
    for pair, group in groups.items():
        # dict keys keep first-seen order, which keeps the output deterministic
        genders = list(dict.fromkeys(entry.item.gender for entry in group))
        classes = list(dict.fromkeys(entry.item.hero_class for entry in group))
        for gender in genders:
            for hero_class in classes:
                matched = [
                    entry
                    for entry in group
                    if gender_matches(entry.item.gender, gender)
                    and class_matches(entry.item.hero_class, hero_class)
                ]
                categories = frozenset(entry.category for entry in matched)
                if not categories:
                    continue
                key = set_key(pair, gender, hero_class)
                lookup[key] = GlobalSetInfo(count=len(categories), categories=categories)
                locations[key] = pvector(matched)

    log.debug("Set lookup rebuilt: %d keys from %d set items", len(lookup), len(entries))
    return SetLookup(lookup=pmap(lookup), locations=pmap(locations), spellings=pmap(spellings))


_memoized_build = memoize_last(build_set_lookup)


def set_lookup(state: InventoryState) -> SetLookup:
    """Set lookup for ``state``, recomputed only when ``state.accounts`` changes."""
    return _memoized_build(state.accounts)


def missing_categories(lookup: SetLookup, key: str) -> Tuple[ItemCategory, ...]:
    """Set categories not yet covered for ``key`` (all of them for unknown keys)."""
    info = lookup.lookup.get(key)
    covered = info.categories if info is not None else frozenset()
    return tuple(category for category in SET_CATEGORIES if category.value not in covered)
