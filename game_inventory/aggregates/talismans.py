"""Talisman duplicate detection.

Three talismans with the same name, colour, tier and class can be crafted
into one of the next tier. This module finds such groups inside one
character's containers, gives each group a stable highlight colour, lists
where a group's members are, and clears the first three of them when the
craft is performed.

Tier ``III`` (top tier) and untiered talismans are never craft candidates.
Tier and colour go through :mod:`game_inventory.utils.talisman`, so records
that only carry them as free text in the secondary enchantment still group
correctly.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from pyrsistent import PMap, pmap, pvector
from pyrsistent.typing import PVector

from game_inventory.constants import TALISMAN_GLOW_COLORS
from game_inventory.layout import occupied_slots
from game_inventory.models import Character, Item
from game_inventory.tree import set_item, with_container
from game_inventory.types import CONTAINER_KEYS, ContainerKey, ItemCategory, SlotID, TalismanTier
from game_inventory.utils.item import has_primary_enchantment, is_category
from game_inventory.utils.memo import memoize_last
from game_inventory.utils.talisman import resolve_color, resolve_tier
from game_inventory.utils.text import fold_token

log = logging.getLogger(__name__)

CRAFT_BATCH = 3
_EXCLUDED_TIERS = (TalismanTier.NONE, TalismanTier.III)


@dataclass(frozen=True)
class TalismanDuplicate:
    """A group of at least three matching talismans.

    Attributes:
        count: Number of matching talismans in the character's containers.
        color: Highlight colour derived from the talisman name.
    """

    count: int
    color: str


@dataclass(frozen=True)
class TalismanLocation:
    container: ContainerKey
    container_id: str
    container_name: str
    row: int
    col: int
    slot_id: SlotID


def _string_hash(text: str) -> int:
    """Signed 32-bit ``h = h * 31 + unit`` over the UTF-16 code units of ``text``."""
    data = text.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        h = (h * 31 + int.from_bytes(data[i : i + 2], "little")) & 0xFFFFFFFF
    return h - 0x100000000 if h >= 0x80000000 else h


def talisman_color(name: str) -> str:
    """Stable highlight colour for a talisman name."""
    return TALISMAN_GLOW_COLORS[abs(_string_hash(fold_token(name))) % len(TALISMAN_GLOW_COLORS)]


def talisman_key(item: Item) -> Optional[str]:
    """Grouping key ``name|color|tier|class`` or ``None`` for non-talismans."""
    if not is_category(item, ItemCategory.TALISMAN) or not has_primary_enchantment(item):
        return None
    color = resolve_color(item).value.casefold()
    tier = resolve_tier(item).value.casefold()
    return f"{fold_token(item.enchantment1)}|{color}|{tier}|{item.hero_class}"


def is_craft_candidate(item: Item) -> bool:
    return talisman_key(item) is not None and resolve_tier(item) not in _EXCLUDED_TIERS


def find_talisman_duplicates(character: Character) -> PMap[str, TalismanDuplicate]:
    """Groups of ``>= 3`` craft-candidate talismans held by ``character``."""
    counts: Dict[str, int] = {}
    for key in CONTAINER_KEYS:
        for slot in getattr(character, key.value).slots:
            item = slot.item
            if item is None or not is_craft_candidate(item):
                continue
            group = talisman_key(item)
            counts[group] = counts.get(group, 0) + 1

    return pmap(
        {
            group: TalismanDuplicate(count=count, color=talisman_color(group.split("|", 1)[0]))
            for group, count in counts.items()
            if count >= CRAFT_BATCH
        }
    )


talisman_duplicates = memoize_last(find_talisman_duplicates)


def talisman_locations(character: Character, item: Item) -> Optional[PVector[TalismanLocation]]:
    """Every location holding a talisman of ``item``'s group.

    Ordered by container (bank1, bank2, bag), then row, then column. ``None``
    unless the group has at least three members.
    """
    if not is_craft_candidate(item):
        return None
    group = talisman_key(item)
    if group not in talisman_duplicates(character):
        return None

    order = {key: idx for idx, key in enumerate(CONTAINER_KEYS)}
    locations: List[TalismanLocation] = []
    for key in CONTAINER_KEYS:
        container = getattr(character, key.value)
        for slot, position in occupied_slots(container):
            if slot.item is not None and talisman_key(slot.item) == group:
                locations.append(
                    TalismanLocation(
                        container=key,
                        container_id=container.id,
                        container_name=container.name,
                        row=position.row,
                        col=position.col,
                        slot_id=slot.id,
                    )
                )
    locations.sort(key=lambda loc: (order[loc.container], loc.row, loc.col))
    if len(locations) < CRAFT_BATCH:
        return None
    return pvector(locations)


def consume_talismans(character: Character, item: Item) -> Character:
    """Clear the first three locations of ``item``'s group (used in a craft).

    Returns ``character`` itself when the group has fewer than three
    members.
    """
    locations = talisman_locations(character, item)
    if locations is None:
        return character

    targets = locations[:CRAFT_BATCH]
    for loc in targets:
        character = with_container(
            character, loc.container, lambda c, s=loc.slot_id: set_item(c, s, None)
        )
    log.debug("Consumed %d talismans of group %s", len(targets), talisman_key(item))
    return character
