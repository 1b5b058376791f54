# tests/aggregates/test_set_completion.py

from dataclasses import replace

from game_inventory.aggregates.set_completion import (
    build_set_lookup,
    collect_set_entries,
    enchantment_pair_key,
    missing_categories,
    set_key_for_item,
    set_lookup,
)
from game_inventory.constants import ALL_GENDERS, RECIPE_BOOK
from game_inventory.state import InventoryState
from game_inventory.tree import CharacterRef
from game_inventory.types import ContainerKey, ItemCategory

from tests.test_utils import make_item, make_recipe, make_state, put_item, with_recipes


def _fire_ice_state() -> InventoryState:
    ring = make_item(ItemCategory.RING, "Fire", "Ice", gender="Male", hero_class="Warrior")
    amulet = make_item(ItemCategory.AMULET, "Ice", "Fire", gender=ALL_GENDERS, hero_class="Mage")
    state = put_item(make_state(), ring, 0)
    return put_item(state, amulet, 5, ContainerKey.BAG)


def test_pair_key_is_order_independent() -> None:
    assert enchantment_pair_key("Fire", "Ice") == "FireIce"
    assert enchantment_pair_key("Ice", "Fire") == "FireIce"
    assert enchantment_pair_key(" Ice ", "Fire") == "FireIce"
    assert enchantment_pair_key("Şimşek", "Ateş") == enchantment_pair_key("Ateş", "Şimşek")
    assert enchantment_pair_key("Fire", "") == "Fire"
    # the key format has no separator, so these two pairs share a key
    assert enchantment_pair_key("FireIce", "") == enchantment_pair_key("Fire", "Ice")


def test_pair_grouping_ignores_letter_case() -> None:
    ring = make_item(ItemCategory.RING, "Fire", "Ice", gender="Male", hero_class="Warrior")
    amulet = make_item(ItemCategory.AMULET, "fire", "ICE", gender="Male", hero_class="Warrior")
    state = put_item(make_state(), ring, 0)
    state = put_item(state, amulet, 1)

    lookup = build_set_lookup(state.accounts)
    assert list(lookup.lookup) == ["FireIce|Male|Warrior"]
    info = lookup.lookup["FireIce|Male|Warrior"]
    assert info.count == 2
    assert info.categories == frozenset({"Ring", "Amulet"})
    assert set_key_for_item(amulet, lookup=lookup) == "FireIce|Male|Warrior"
    assert set_key_for_item(amulet) == "fireICE|Male|Warrior"


def test_fire_ice_scenario() -> None:
    lookup = build_set_lookup(_fire_ice_state().accounts)

    warrior = lookup.lookup["FireIce|Male|Warrior"]
    assert warrior.count == 1
    assert warrior.categories == frozenset({"Ring"})

    # the Ring is Warrior-only, so only the "all genders" Amulet fits a Male Mage
    mage = lookup.lookup["FireIce|Male|Mage"]
    assert mage.count == 1
    assert mage.categories == frozenset({"Amulet"})

    # the sentinel gender row sees both items for the classes they fit
    assert lookup.lookup[f"FireIce|{ALL_GENDERS}|Warrior"].categories == frozenset({"Ring"})
    assert lookup.lookup[f"FireIce|{ALL_GENDERS}|Mage"].categories == frozenset({"Amulet"})
    assert len(lookup.lookup) == 4


def test_locations_point_at_the_items() -> None:
    lookup = build_set_lookup(_fire_ice_state().accounts)
    (location,) = lookup.locations["FireIce|Male|Warrior"]
    assert (location.container_name, location.row, location.col) == ("Bank 1", 0, 0)
    assert location.category == "Ring"
    assert location.server_name == "Eminönü"

    (amulet,) = lookup.locations["FireIce|Male|Mage"]
    # bag slot 5 sits on the base block at row 5, column 1
    assert (amulet.container_name, amulet.row, amulet.col) == ("Bag", 5, 1)


def test_sentinel_class_contributes_to_every_observed_class() -> None:
    state = _fire_ice_state()
    gloves = make_item(ItemCategory.GLOVES, "Fire", "Ice", gender="Male")
    lookup = build_set_lookup(put_item(state, gloves, 1).accounts)
    assert lookup.lookup["FireIce|Male|Warrior"].categories == frozenset({"Ring", "Gloves"})
    assert lookup.lookup["FireIce|Male|Mage"].categories == frozenset({"Amulet", "Gloves"})


def test_adding_an_item_never_shrinks_coverage() -> None:
    state = _fire_ice_state()
    before = build_set_lookup(state.accounts)
    shoes = make_item(ItemCategory.SHOES, "Ice", "Fire", gender="Male", hero_class="Warrior")
    after = build_set_lookup(put_item(state, shoes, 2).accounts)
    for key, info in before.lookup.items():
        assert after.lookup[key].count >= info.count
        assert info.categories <= after.lookup[key].categories
    assert after.lookup["FireIce|Male|Warrior"].count == 2


def test_recipes_and_other_accounts_are_included() -> None:
    state = make_state("acc-0", "acc-1")
    recipe = make_recipe(ItemCategory.PANTS, "Fire", enchantment2="Ice", gender="Male", hero_class="Warrior")
    state = with_recipes(state, recipe)
    other = CharacterRef("acc-1", 2, 3)
    state = put_item(state, make_item(ItemCategory.WEAPON, "Fire", "Ice", hero_class="Warrior"), 0, ref=other)

    entries = collect_set_entries(state.accounts)
    book = [e for e in entries if e.container_name == RECIPE_BOOK]
    assert len(book) == 1 and (book[0].row, book[0].col) == (0, 0)

    lookup = build_set_lookup(state.accounts)
    assert lookup.lookup["FireIce|Male|Warrior"].categories == frozenset({"Pants", "Weapon"})


def test_ineligible_items_are_ignored() -> None:
    state = put_item(make_state(), make_item(ItemCategory.RING, "", "Ice"), 0)
    state = put_item(state, make_item(ItemCategory.GLASSES, "Fire", "Ice"), 1)
    state = put_item(state, make_item(ItemCategory.TALISMAN, "Fire", "Ice"), 2)
    assert len(build_set_lookup(state.accounts).lookup) == 0


def test_missing_categories_and_item_key() -> None:
    state = _fire_ice_state()
    lookup = build_set_lookup(state.accounts)
    missing = missing_categories(lookup, "FireIce|Male|Warrior")
    assert ItemCategory.RING not in missing
    assert ItemCategory.AMULET in missing
    assert len(missing) == 7
    assert len(missing_categories(lookup, "nope")) == 8

    ring = make_item(ItemCategory.RING, "Ice", "Fire", gender="Male", hero_class="Warrior")
    assert set_key_for_item(ring) == "FireIce|Male|Warrior"
    assert set_key_for_item(ring, hero_class="Mage") == "FireIce|Male|Mage"


def test_set_lookup_is_memoized_on_accounts_identity() -> None:
    state = _fire_ice_state()
    first = set_lookup(state)
    assert set_lookup(replace(state)) is first

    changed = put_item(state, make_item(ItemCategory.SHOES, "Fire", "Ice"), 3)
    assert set_lookup(changed) is not first
    # a no-op step keeps the same accounts vector, so nothing is rebuilt
    again = put_item(changed, make_item(), 999)
    assert again is changed
    assert set_lookup(again) is set_lookup(changed)
