"""Document normalization and legacy migration.

Rebuilds any persisted or partially formed document into the canonical
``Account`` tree. The rules, applied top-down:

1. A field of the wrong type, or a missing one, takes the value of the same
   field on a freshly built default entity (:mod:`game_inventory.factories`).
2. Legacy accounts (a flat ``characters`` list and no ``servers``) migrate:
   the flat list becomes the first server's characters and the rest of the
   roster gets default characters.
3. Slot vectors grow to ``max(len(raw), required_minimum)``; stored items are
   never dropped. The bag additionally goes through :func:`apply_bag_layout`.
4. ``rows``/``cols`` fall back to defaults unless they are finite positive
   numbers no larger than 100.

Nothing here raises. A malformed sub-tree degrades to defaults so one corrupt
character never blocks the rest of the account. Already-canonical model
objects are accepted as input, which makes normalization idempotent.

Missing ids are derived from the position in the document (``uuid5`` over a
path string) rather than drawn at random, so normalizing the same input twice
gives equal trees.
"""

import logging
import math
import uuid
from dataclasses import is_dataclass, replace
from typing import Any, List, Mapping, Optional, Sequence, Set

from pyrsistent import pvector
from pyrsistent.typing import PVector

from game_inventory.config import DEFAULT_CONFIG, InventoryConfig
from game_inventory.constants import (
    ALL_CLASSES,
    ALL_GENDERS,
    DEFAULT_ACCOUNT_NAME,
    MAX_LEVEL,
    MIN_LEVEL,
    SERVER_NAMES,
)
from game_inventory.factories import (
    create_character,
    server_id,
    server_name,
)
from game_inventory.layout import (
    BAG_GRID_COLS,
    BAG_GRID_ROWS,
    BAG_SLOT_COUNT,
    is_bag_container,
)
from game_inventory.models import Account, Character, Container, Item, Server, Slot
from game_inventory.serialize import to_document
from game_inventory.state import InventoryState
from game_inventory.types import ItemCategory, ItemType, TalismanTier
from game_inventory.utils.item import (
    canonical_category,
    is_all_classes,
    is_all_genders,
    is_bindable,
    is_classless,
    is_genderless,
)
from game_inventory.utils.talisman import parse_tier
from game_inventory.utils.text import clean_text, fold_token

log = logging.getLogger(__name__)

_ID_NAMESPACE = uuid.UUID("6f1c2a52-3f0e-4d8e-9a47-2b6d1d0c7e15")
_RECIPE_TOKENS = {"recipe", "recete"}
# larger numbers are treated as corrupt and fall back to defaults
_MAX_INT = 2**31 - 1
_MAX_GRID_SIDE = 100


# -------- Primitive coercion --------


def _as_mapping(raw: Any) -> Mapping[str, Any]:
    if isinstance(raw, Mapping):
        return raw
    if is_dataclass(raw) and not isinstance(raw, type):
        return to_document(raw)
    return {}


def _as_list(raw: Any) -> Optional[List[Any]]:
    if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        return list(raw)
    return None


def _str_or(value: Any, fallback: str) -> str:
    return value if isinstance(value, str) else fallback


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _positive_int(value: Any, limit: int = _MAX_INT) -> Optional[int]:
    """Floor of a finite number in ``1..limit``, else ``None``."""
    if not _is_number(value):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    floored = math.floor(value)
    return floored if 1 <= floored <= limit else None


def _loose_int(value: Any) -> Optional[int]:
    """Like :func:`_positive_int` but also accepts numeric strings."""
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    return _positive_int(value)


def _derived_id(path: str) -> str:
    return uuid.uuid5(_ID_NAMESPACE, path).hex


# -------- Items & slots --------


def normalize_item(raw: Any, path: str = "item") -> Optional[Item]:
    """Canonical ``Item`` for ``raw`` or ``None`` when ``raw`` is not an item.

    Legacy category labels map onto :class:`ItemCategory` (unknown labels
    become ``OTHER``), level is clamped to 1..59 and count to >= 1. Genderless
    and classless categories always carry the "all" sentinel, and only
    bindable equipment keeps ``is_bound``.
    """
    if raw is None:
        return None
    data = _as_mapping(raw)
    if not data:
        log.debug("Dropping non-item value at %s", path)
        return None

    item_id = data.get("id")
    if not isinstance(item_id, str) or not item_id.strip():
        item_id = _derived_id(path)

    is_recipe = fold_token(data.get("type")) in _RECIPE_TOKENS
    category = canonical_category(data.get("category")) or ItemCategory.OTHER

    hero_class = clean_text(_str_or(data.get("heroClass"), ""))
    if is_classless(category) or not hero_class or is_all_classes(hero_class):
        hero_class = ALL_CLASSES
    gender = clean_text(_str_or(data.get("gender"), ""))
    if is_genderless(category) or not gender or is_all_genders(gender):
        gender = ALL_GENDERS

    level = _loose_int(data.get("level")) or MIN_LEVEL
    weapon_type = clean_text(_str_or(data.get("weaponType"), ""))

    tier: Optional[TalismanTier] = None
    if category == ItemCategory.TALISMAN:
        tier = parse_tier(data.get("talismanTier"))

    item = Item(
        id=item_id,
        type=ItemType.RECIPE if is_recipe else ItemType.ITEM,
        category=category,
        enchantment1=clean_text(_str_or(data.get("enchantment1"), "")),
        enchantment2=clean_text(_str_or(data.get("enchantment2"), "")),
        talisman_tier=tier,
        hero_class=hero_class,
        gender=gender,
        level=min(MAX_LEVEL, max(MIN_LEVEL, level)),
        count=_loose_int(data.get("count")) or 1,
        weapon_type=weapon_type or None,
        is_read=is_recipe and data.get("isRead") is True,
        is_global=data.get("isGlobal") is True,
        is_bound=data.get("isBound") is True,
    )
    if item.is_bound and not is_bindable(item):
        item = replace(item, is_bound=False)
    return item


def normalize_slots(raw_slots: Any, min_count: int, path: str = "slots") -> PVector[Slot]:
    """Slot vector of length ``max(min_count, len(raw_slots))``.

    Slot ids are re-derived from positions; any slot entry that is not a
    mapping (or whose item is malformed) becomes an empty slot.
    """
    entries = _as_list(raw_slots) or []
    count = max(min_count, len(entries))
    slots = []
    for index in range(count):
        entry = _as_mapping(entries[index]) if index < len(entries) else {}
        item = normalize_item(entry.get("item"), f"{path}/{index}")
        slots.append(Slot(id=index, item=item))
    return pvector(slots)


# -------- Containers --------


def normalize_container(raw: Any, fallback: Container, path: str = "container") -> Container:
    """Normalize a rectangular (bank) container against ``fallback``."""
    data = _as_mapping(raw)
    rows = _positive_int(data.get("rows"), _MAX_GRID_SIDE) or fallback.rows
    cols = _positive_int(data.get("cols"), _MAX_GRID_SIDE) or fallback.cols
    container = Container(
        id=_str_or(data.get("id"), fallback.id),
        name=_str_or(data.get("name"), fallback.name),
        rows=rows,
        cols=cols,
        slots=normalize_slots(
            data.get("slots"), max(len(fallback.slots), rows * cols), f"{path}/slots"
        ),
    )
    if is_bag_container(container):
        # A bank must never be addressed with the bag table.
        container = replace(container, id=fallback.id, name=fallback.name)
    return container


def apply_bag_layout(container: Container) -> Container:
    """Force the bag geometry onto ``container``.

    Slots are padded to :data:`BAG_SLOT_COUNT` and re-indexed; slots past the
    layout are kept (never dropped) even though they are not addressable.
    """
    slots = [
        Slot(id=index, item=container.slots[index].item if index < len(container.slots) else None)
        for index in range(max(BAG_SLOT_COUNT, len(container.slots)))
    ]
    return replace(container, rows=BAG_GRID_ROWS, cols=BAG_GRID_COLS, slots=pvector(slots))


def normalize_bag_container(raw: Any, fallback: Container, path: str = "bag") -> Container:
    data = _as_mapping(raw)
    container = Container(
        id=_str_or(data.get("id"), fallback.id),
        name=_str_or(data.get("name"), fallback.name),
        rows=fallback.rows,
        cols=fallback.cols,
        slots=normalize_slots(data.get("slots"), BAG_SLOT_COUNT, f"{path}/slots"),
    )
    if not is_bag_container(container):
        container = replace(container, id=fallback.id, name=fallback.name)
    return apply_bag_layout(container)


# -------- Characters, servers, accounts --------


def normalize_character(
    raw: Any,
    char_index: int,
    path: str = "character",
    config: InventoryConfig = DEFAULT_CONFIG,
) -> Character:
    """Normalize one character; the default for ``char_index`` fills gaps.

    Learned recipes are always read recipes. A recipe whose id also sits in
    one of the character's slots is dropped from the book so an item is never
    in both places.
    """
    fallback = create_character(char_index, config)
    data = _as_mapping(raw)

    char_id = data.get("id")
    if not isinstance(char_id, int) or isinstance(char_id, bool):
        char_id = fallback.id

    bank1 = normalize_container(data.get("bank1"), fallback.bank1, f"{path}/bank1")
    bank2 = normalize_container(data.get("bank2"), fallback.bank2, f"{path}/bank2")
    bag = normalize_bag_container(data.get("bag"), fallback.bag, f"{path}/bag")

    slotted: Set[str] = {
        slot.item.id
        for container in (bank1, bank2, bag)
        for slot in container.slots
        if slot.item is not None
    }
    recipes: List[Item] = []
    seen: Set[str] = set()
    for index, raw_recipe in enumerate(_as_list(data.get("learnedRecipes")) or []):
        recipe = normalize_item(raw_recipe, f"{path}/learnedRecipes/{index}")
        if recipe is None or recipe.id in seen:
            continue
        if recipe.id in slotted:
            log.debug("Recipe %s is also in a slot at %s; keeping the slot copy", recipe.id, path)
            continue
        seen.add(recipe.id)
        recipes.append(replace(recipe, type=ItemType.RECIPE, is_read=True))

    return Character(
        id=char_id,
        name=_str_or(data.get("name"), fallback.name),
        bank1=bank1,
        bank2=bank2,
        bag=bag,
        learned_recipes=pvector(recipes),
    )


def _normalize_characters(
    raw_chars: Optional[List[Any]], path: str, config: InventoryConfig
) -> PVector[Character]:
    entries = raw_chars or []
    count = max(len(entries), config.characters_per_server)
    return pvector(
        normalize_character(
            entries[idx] if idx < len(entries) else None, idx, f"{path}/characters/{idx}", config
        )
        for idx in range(count)
    )


def normalize_server(
    raw: Any,
    index: int,
    account_id: str,
    config: InventoryConfig = DEFAULT_CONFIG,
) -> Server:
    """Normalize one server; an empty character list gets default characters."""
    data = _as_mapping(raw)
    sid = _str_or(data.get("id"), server_id(account_id, index))
    return Server(
        id=sid,
        name=_str_or(data.get("name"), server_name(index)),
        characters=_normalize_characters(
            _as_list(data.get("characters")), f"{account_id}/servers/{index}", config
        ),
    )


def normalize_account(
    raw: Any, index: int = 0, config: InventoryConfig = DEFAULT_CONFIG
) -> Account:
    """Canonical ``Account`` for any input, migrating legacy documents.

    Args:
        raw: Persisted account document, model object or anything else.
        index: Position of the account in its document; seeds derived ids.
        config: Defaults for newly created characters and banks.

    Returns:
        Account: Always a complete tree with at least one server per roster
        entry.
    """
    data = _as_mapping(raw)
    account_id = data.get("id")
    if not isinstance(account_id, str) or not account_id:
        account_id = _derived_id(f"account/{index}")
    name = _str_or(data.get("name"), DEFAULT_ACCOUNT_NAME)

    raw_servers = _as_list(data.get("servers")) or []
    if raw_servers:
        servers = [
            normalize_server(raw_server, idx, account_id, config)
            for idx, raw_server in enumerate(raw_servers)
        ]
    else:
        legacy_chars = _as_list(data.get("characters"))
        if legacy_chars:
            log.debug(
                "Migrating legacy account %s: %d characters into server %r",
                account_id,
                len(legacy_chars),
                SERVER_NAMES[0],
            )
        servers = [
            normalize_server(
                {"characters": legacy_chars} if idx == 0 else None, idx, account_id, config
            )
            for idx in range(len(SERVER_NAMES))
        ]

    for idx in range(len(servers), len(SERVER_NAMES)):
        servers.append(normalize_server(None, idx, account_id, config))

    return Account(id=account_id, name=name, servers=pvector(servers))


def normalize_accounts(raw: Any, config: InventoryConfig = DEFAULT_CONFIG) -> PVector[Account]:
    """Normalize the root account list; duplicate account ids keep the first."""
    entries = _as_list(raw) or []
    accounts: List[Account] = []
    seen: Set[str] = set()
    for index, entry in enumerate(entries):
        account = normalize_account(entry, index, config)
        if account.id in seen:
            log.debug("Skipping duplicate account id %s", account.id)
            continue
        seen.add(account.id)
        accounts.append(account)
    return pvector(accounts)


def load_state(document: Any, config: InventoryConfig = DEFAULT_CONFIG) -> InventoryState:
    """Build an ``InventoryState`` from a user document or a bare account list."""
    if isinstance(document, InventoryState):
        return InventoryState(accounts=normalize_accounts(document.accounts, config))
    data = document.get("accounts") if isinstance(document, Mapping) else document
    return InventoryState(accounts=normalize_accounts(data, config))

