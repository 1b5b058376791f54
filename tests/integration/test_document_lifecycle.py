# tests/integration/test_document_lifecycle.py

from typing import Any, Dict

from game_inventory.actions import AddAccount, MoveItem, ReadRecipe, SetSlotItem
from game_inventory.aggregates import set_lookup, talisman_duplicates
from game_inventory.constants import SERVER_NAMES
from game_inventory.normalize import load_state
from game_inventory.serialize import accounts_document
from game_inventory.step import step
from game_inventory.tree import CharacterRef, get_character
from game_inventory.types import ContainerKey, ItemCategory


def _legacy_user_document() -> Dict[str, Any]:
    def talisman(item_id: str) -> Dict[str, Any]:
        return {"id": item_id, "category": "Tılsım", "enchantment1": "Ejderha", "enchantment2": "Kırmızı I"}

    return {
        "accounts": [
            {
                "id": "old",
                "name": "Legacy",
                "characters": [
                    {
                        "id": 0,
                        "name": "Hero",
                        "bank1": {
                            "rows": 8,
                            "cols": 8,
                            "slots": [
                                {"id": 0, "item": talisman("t1")},
                                {"id": 1, "item": talisman("t2")},
                                {"id": 2, "item": {"id": "r", "type": "Reçete", "category": "Yüzük", "enchantment1": "Ateş", "enchantment2": "Buz"}},
                            ],
                        },
                        "bag": {"slots": [{"id": 0, "item": talisman("t3")}]},
                    },
                    {"id": 1, "name": "Alt"},
                    {"id": 2, "name": "Third"},
                    {"id": 3, "name": "Fourth"},
                ],
            }
        ]
    }


def test_legacy_document_load_edit_save_reload() -> None:
    state = load_state(_legacy_user_document())
    (account,) = state.accounts
    assert len(account.servers) == len(SERVER_NAMES)
    ref = CharacterRef("old", 0, 0)
    hero = get_character(state, ref)
    assert hero is not None and hero.name == "Hero"

    groups = talisman_duplicates(hero)
    assert [group.count for group in groups.values()] == [3]

    state = step(state, ReadRecipe(ref, ContainerKey.BANK1, 2))
    hero = get_character(state, ref)
    assert hero is not None
    assert [recipe.id for recipe in hero.learned_recipes] == ["r"]
    assert set_lookup(state).lookup["AteşBuz|Tüm Cinsiyetler|Tüm Sınıflar"].count == 1

    state = step(state, MoveItem(ref, ContainerKey.BANK1, 0, 10))
    state = step(state, SetSlotItem(ref, ContainerKey.BAG, 0, None))
    state = step(state, AddAccount(name="Second", account_id="new"))
    hero = get_character(state, ref)
    assert hero is not None
    assert len(talisman_duplicates(hero)) == 0

    reloaded = load_state(accounts_document(state))
    assert reloaded == state
    moved = get_character(reloaded, ref).bank1.slots[10].item
    assert moved is not None and moved.category == ItemCategory.TALISMAN
