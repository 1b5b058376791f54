# tests/aggregates/test_summary.py

from game_inventory.aggregates.summary import summarize_account, summarize_accounts
from game_inventory.tree import CharacterRef
from game_inventory.types import ContainerKey, ItemCategory

from tests.test_utils import make_item, make_recipe, make_state, put_item, with_recipes


def test_empty_account() -> None:
    summary = summarize_account(make_state().accounts[0])
    assert (summary.item_count, summary.recipe_count) == (0, 0)
    assert len(summary.by_category) == 0


def test_counts_by_category() -> None:
    state = put_item(make_state(), make_item(ItemCategory.RING, count=5), 0)
    state = put_item(state, make_item("Yüzük"), 1, ContainerKey.BAG)
    state = put_item(state, make_item("Helmet"), 2)
    state = with_recipes(state, make_recipe(), make_recipe())

    summary = summarize_account(state.accounts[0])
    assert summary.item_count == 3
    assert summary.recipe_count == 2
    assert dict(summary.by_category) == {"Ring": 2, "Other": 1}


def test_multiple_accounts_add_up() -> None:
    state = make_state("a", "b")
    state = put_item(state, make_item(ItemCategory.WEAPON), 0, ref=CharacterRef("a", 0, 0))
    state = put_item(state, make_item(ItemCategory.WEAPON), 0, ref=CharacterRef("b", 4, 3))
    summary = summarize_accounts(state.accounts)
    assert summary.item_count == 2
    assert summary.by_category["Weapon"] == 2
    assert summarize_accounts(()).item_count == 0
