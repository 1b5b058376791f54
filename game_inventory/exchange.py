"""Import/export boundary.

Spreadsheet files are parsed and written elsewhere; this module only turns an
account into flat rows and applies already parsed rows back onto an account.
Grid coordinates go through :mod:`game_inventory.layout`, so a row exported
from a bag slot imports into the same bag slot.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Tuple

from pyrsistent.typing import PVector

from game_inventory.constants import RECIPE_BOOK
from game_inventory.factories import create_character, new_id
from game_inventory.layout import occupied_slots, slot_index_of
from game_inventory.models import Account, Character, Item, Server
from game_inventory.tree import container_of, replace_at, set_item, with_container
from game_inventory.types import CONTAINER_KEYS, ContainerKey, ItemType
from game_inventory.utils.text import clean_text, compact_token, fold_token

log = logging.getLogger(__name__)

RECIPE_BOOK_KEY = "learned"

# compact token -> container key (or the recipe book)
CONTAINER_ALIASES = {
    "bank1": ContainerKey.BANK1,
    "kasa1": ContainerKey.BANK1,
    "kasa01": ContainerKey.BANK1,
    "bank2": ContainerKey.BANK2,
    "kasa2": ContainerKey.BANK2,
    "kasa02": ContainerKey.BANK2,
    "bag": ContainerKey.BAG,
    "canta": ContainerKey.BAG,
    "cantasi": ContainerKey.BAG,
    "recipebook": RECIPE_BOOK_KEY,
    "recetekitabi": RECIPE_BOOK_KEY,
    "okunmusrecete": RECIPE_BOOK_KEY,
    "learnedrecipes": RECIPE_BOOK_KEY,
}


@dataclass(frozen=True)
class ExportRow:
    """One exported item.

    Attributes:
        account: Account display name.
        server: Server display name.
        character: Character display name.
        container: Container display name, or ``RECIPE_BOOK``.
        row: Grid row, ``None`` for recipe-book rows.
        col: Grid column, ``None`` for recipe-book rows.
        item: The item itself.
    """

    account: str
    server: str
    character: str
    container: str
    row: Optional[int]
    col: Optional[int]
    item: Item


@dataclass(frozen=True)
class ImportRow:
    server: str
    character: str
    container: str
    row: Optional[int]
    col: Optional[int]
    item: Item


@dataclass(frozen=True)
class ImportResult:
    """Outcome of :func:`import_rows`.

    Attributes:
        account: The updated account (the input object if nothing applied).
        applied: Rows written into a slot or the recipe book.
        skipped: Rows that could not be placed.
        issues: One human-readable line per skipped row.
    """

    account: Account
    applied: int = 0
    skipped: int = 0
    issues: Tuple[str, ...] = field(default_factory=tuple)


def export_rows(account: Account) -> List[ExportRow]:
    """Flatten ``account`` into rows, slots first and then each recipe book."""
    rows: List[ExportRow] = []
    for server in account.servers:
        for character in server.characters:
            for key in CONTAINER_KEYS:
                container = getattr(character, key.value)
                for slot, position in occupied_slots(container):
                    rows.append(
                        ExportRow(
                            account=account.name,
                            server=server.name,
                            character=character.name,
                            container=container.name,
                            row=position.row,
                            col=position.col,
                            item=slot.item,
                        )
                    )
            for recipe in character.learned_recipes:
                rows.append(
                    ExportRow(
                        account=account.name,
                        server=server.name,
                        character=character.name,
                        container=RECIPE_BOOK,
                        row=None,
                        col=None,
                        item=recipe,
                    )
                )
    return rows


def resolve_container(name: str) -> Optional[str]:
    """Map a container label to ``bank1``/``bank2``/``bag``/``learned``."""
    return CONTAINER_ALIASES.get(compact_token(name))


def recipe_signature(item: Item) -> str:
    """Content signature used to skip recipes already in a book."""
    return "|".join(
        (
            fold_token(item.category),
            fold_token(item.enchantment1),
            fold_token(item.enchantment2),
            fold_token(item.talisman_tier or ""),
            fold_token(item.weapon_type or ""),
            str(item.level),
            fold_token(item.gender),
            fold_token(item.hero_class),
            str(item.count),
        )
    )


def _find_index(names: Iterable[str], wanted: str) -> Optional[int]:
    token = fold_token(wanted)
    for index, name in enumerate(names):
        if fold_token(name) == token:
            return index
    return None


def _add_character(server: Server, name: str) -> Tuple[Server, int]:
    next_id = max((character.id for character in server.characters), default=-1) + 1
    character = replace(create_character(next_id), name=name)
    return replace(server, characters=server.characters.append(character)), len(server.characters)


def _place(character: Character, row: ImportRow, target: str) -> Tuple[Character, Optional[str]]:
    """Apply one row to ``character``; the second value is an issue, if any.

    The written item always gets a fresh id, so importing an export again
    never puts one id in two places.
    """
    item = replace(row.item, id=new_id())
    if target == RECIPE_BOOK_KEY or (item.type == ItemType.RECIPE and item.is_read):
        if item.type != ItemType.RECIPE:
            return character, f"only recipes can go into the {RECIPE_BOOK}"
        signature = recipe_signature(item)
        if any(recipe_signature(recipe) == signature for recipe in character.learned_recipes):
            return character, "recipe is already in the recipe book"
        recipe = replace(item, is_read=True)
        return replace(character, learned_recipes=character.learned_recipes.append(recipe)), None

    container = container_of(character, target)
    slot_id = slot_index_of(container, row.row, row.col) if container is not None else None
    if slot_id is None:
        return character, f"no slot at row {row.row}, column {row.col} of {target}"
    return with_container(character, target, lambda c: set_item(c, slot_id, item)), None


def import_rows(account: Account, rows: Iterable[ImportRow]) -> ImportResult:
    """Write parsed rows into ``account``.

    Servers and characters are matched by name (case and diacritics
    ignored). A character name that matches nothing creates a new character
    on that server. Every imported item gets a new id. Rows that cannot be
    placed are skipped and reported; they never abort the import.
    """
    applied = 0
    issues: List[str] = []
    servers: PVector[Server] = account.servers

    for number, row in enumerate(rows, start=1):
        server_index = _find_index((server.name for server in servers), row.server)
        if server_index is None:
            issues.append(f"Row {number}: unknown server {clean_text(row.server) or '-'}")
            continue

        target = resolve_container(row.container)
        if target is None:
            issues.append(f"Row {number}: unknown container {clean_text(row.container) or '-'}")
            continue

        server = servers[server_index]
        char_index = _find_index((character.name for character in server.characters), row.character)
        if char_index is None:
            name = clean_text(row.character)
            if not name:
                issues.append(f"Row {number}: character name is empty")
                continue
            server, char_index = _add_character(server, name)
            servers = servers.set(server_index, server)
            log.debug("Import created character %s on %s", name, server.name)

        character = server.characters[char_index]
        updated, issue = _place(character, row, target)
        if issue is not None:
            issues.append(f"Row {number}: {issue}")
            continue
        servers = replace_at(
            servers,
            server_index,
            lambda s: replace(s, characters=s.characters.set(char_index, updated)),
        )
        applied += 1

    if servers is not account.servers:
        account = replace(account, servers=servers)
    log.info("Imported %d rows into %s, skipped %d", applied, account.name, len(issues))
    return ImportResult(account=account, applied=applied, skipped=len(issues), issues=tuple(issues))
