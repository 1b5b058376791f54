"""Derived views over the inventory tree.

Each aggregate is a pure function of the tree; the memoized entry points
(:func:`set_lookup`, :func:`talisman_duplicates`) recompute only when the
object they read has been replaced.
"""

from .set_completion import (
    GlobalSetInfo,
    SetItemLocation,
    SetLookup,
    build_set_lookup,
    collect_set_entries,
    enchantment_pair_key,
    missing_categories,
    set_key_for_item,
    set_lookup,
)
from .summary import InventorySummary, summarize_account, summarize_accounts
from .talismans import (
    TalismanDuplicate,
    TalismanLocation,
    consume_talismans,
    find_talisman_duplicates,
    talisman_color,
    talisman_duplicates,
    talisman_key,
    talisman_locations,
)

__all__ = [
    "GlobalSetInfo",
    "InventorySummary",
    "SetItemLocation",
    "SetLookup",
    "TalismanDuplicate",
    "TalismanLocation",
    "build_set_lookup",
    "collect_set_entries",
    "consume_talismans",
    "enchantment_pair_key",
    "find_talisman_duplicates",
    "missing_categories",
    "set_key_for_item",
    "set_lookup",
    "summarize_account",
    "summarize_accounts",
    "talisman_color",
    "talisman_duplicates",
    "talisman_key",
    "talisman_locations",
]
