"""Talisman tier/colour resolution.

Older talisman records have no structured colour and often no structured
tier: both were typed into the free-text secondary enchantment. Every
consumer resolves them through this module so the fallback policy lives in
one place:

* tier: ``talisman_tier`` field → parsed from ``enchantment2`` → ``NONE``
* colour: parsed from ``enchantment2`` → ``BLUE``
"""

import re
from typing import Any, Optional

from game_inventory.models import Item
from game_inventory.types import (
    COLOR_ALIASES,
    TIER_ALIASES,
    TalismanColor,
    TalismanTier,
)
from game_inventory.utils.text import fold_token

DEFAULT_COLOR = TalismanColor.BLUE

_WORD_SEPARATORS = re.compile(r"[\s/,;:()|]+")


def _words(value: Any):
    token = fold_token(value)
    yield token
    yield from (word for word in _WORD_SEPARATORS.split(token) if word)


def parse_tier(value: Any) -> Optional[TalismanTier]:
    """Parse a tier from a tier field or free text (``"II"``, ``"Mavi 2"``).

    A lone ``"-"`` means "no tier"; inside longer text a dash is punctuation.
    """
    if isinstance(value, TalismanTier):
        return value
    words = _words(value)
    whole = next(words)
    if whole in TIER_ALIASES:
        return TIER_ALIASES[whole]
    for word in words:
        tier = TIER_ALIASES.get(word)
        if tier is not None and tier != TalismanTier.NONE:
            return tier
    return None


def parse_color(value: Any) -> Optional[TalismanColor]:
    """Parse a colour from free text (``"Kırmızı"``, ``"red II"``)."""
    if isinstance(value, TalismanColor):
        return value
    for word in _words(value):
        color = COLOR_ALIASES.get(word)
        if color is not None:
            return color
    return None


def resolve_tier(item: Item) -> TalismanTier:
    return parse_tier(item.talisman_tier) or parse_tier(item.enchantment2) or TalismanTier.NONE


def resolve_color(item: Item) -> TalismanColor:
    return parse_color(item.enchantment2) or DEFAULT_COLOR
