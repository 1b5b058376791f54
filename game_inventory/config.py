"""Runtime configuration.

``InventoryConfig`` bundles the tunables the default factories and the
reducer read. Values come from keyword arguments or, through
:meth:`InventoryConfig.from_env`, from ``GAME_INVENTORY_*`` environment
variables. Malformed environment values are logged and ignored so a bad
deployment setting never blocks loading inventory data.
"""

import logging
import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

from game_inventory.constants import BANK_COLS, BANK_ROWS, CHARACTERS_PER_SERVER

log = logging.getLogger(__name__)

ENV_PREFIX = "GAME_INVENTORY_"


@dataclass(frozen=True)
class InventoryConfig:
    """Tunables for default entities and account management.

    Attributes:
        characters_per_server: Characters created for every new server.
        bank_rows: Row count of a default bank container.
        bank_cols: Column count of a default bank container.
        max_accounts: Upper bound enforced by ``AddAccount``.
    """

    characters_per_server: int = CHARACTERS_PER_SERVER
    bank_rows: int = BANK_ROWS
    bank_cols: int = BANK_COLS
    max_accounts: int = 10

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{f.name} must be a positive integer, got {value!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "InventoryConfig":
        """Build a config from ``GAME_INVENTORY_<FIELD>`` variables."""
        env = os.environ if environ is None else environ
        overrides = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            try:
                value = int(raw)
            except ValueError:
                log.warning("Ignoring %s%s=%r: not an integer", ENV_PREFIX, f.name.upper(), raw)
                continue
            if value <= 0:
                log.warning("Ignoring %s%s=%r: must be positive", ENV_PREFIX, f.name.upper(), raw)
                continue
            overrides[f.name] = value
        return cls(**overrides)


DEFAULT_CONFIG = InventoryConfig()
