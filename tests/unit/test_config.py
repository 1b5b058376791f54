# tests/unit/test_config.py

import logging

import pytest

from game_inventory.config import DEFAULT_CONFIG, InventoryConfig
from game_inventory.factories import create_account, create_character


def test_defaults() -> None:
    assert DEFAULT_CONFIG == InventoryConfig()
    assert (DEFAULT_CONFIG.bank_rows, DEFAULT_CONFIG.bank_cols) == (8, 8)
    assert DEFAULT_CONFIG.characters_per_server == 4


@pytest.mark.parametrize("value", [0, -1, 2.5, True, "3"])
def test_invalid_explicit_values_raise(value: object) -> None:
    with pytest.raises(ValueError):
        InventoryConfig(bank_rows=value)  # type: ignore[arg-type]


def test_from_env_overrides_and_ignores_bad_values(caplog: pytest.LogCaptureFixture) -> None:
    environ = {
        "GAME_INVENTORY_BANK_ROWS": "6",
        "GAME_INVENTORY_MAX_ACCOUNTS": "many",
        "GAME_INVENTORY_CHARACTERS_PER_SERVER": "0",
        "UNRELATED": "1",
    }
    with caplog.at_level(logging.WARNING, logger="game_inventory.config"):
        config = InventoryConfig.from_env(environ)
    assert config.bank_rows == 6
    assert config.max_accounts == DEFAULT_CONFIG.max_accounts
    assert config.characters_per_server == DEFAULT_CONFIG.characters_per_server
    assert len(caplog.records) == 2


def test_config_shapes_default_entities() -> None:
    config = InventoryConfig(characters_per_server=2, bank_rows=4, bank_cols=5)
    character = create_character(0, config)
    assert (character.bank1.rows, character.bank1.cols, len(character.bank1.slots)) == (4, 5, 20)
    account = create_account("a", "A", config)
    assert all(len(server.characters) == 2 for server in account.servers)
