"""Root inventory snapshot.

:class:`InventoryState` is the single source of truth for one user document:
every user action is a pure function from one snapshot to the next (see
:mod:`game_inventory.step`), and the derived views in
:mod:`game_inventory.aggregates` are recomputed only when the ``accounts``
vector is replaced.

Design notes:

* ``accounts`` is a persistent vector. A mutation rebuilds the path from the
  vector to the edited slot and shares every untouched account, server,
  character and container by reference, so identity comparisons are a cheap
  "did this sub-tree change" test.
* The snapshot holds only persisted data. Selection, modals and other
  presentation state live outside it.
"""

from dataclasses import dataclass
from typing import Any, Optional

from pyrsistent import PMap, pmap, pvector
from pyrsistent.typing import PVector

from game_inventory.models import Account
from game_inventory.types import AccountID


@dataclass(frozen=True)
class InventoryState:
    """Immutable inventory snapshot.

    Attributes:
        accounts: Accounts in display order.
    """

    accounts: PVector[Account] = pvector()

    def account(self, account_id: AccountID) -> Optional[Account]:
        """Return the account with ``account_id`` or ``None``."""
        return next((acc for acc in self.accounts if acc.id == account_id), None)

    def account_index(self, account_id: AccountID) -> Optional[int]:
        return next(
            (idx for idx, acc in enumerate(self.accounts) if acc.id == account_id),
            None,
        )

    @property
    def description(self) -> PMap[str, Any]:
        """Short diagnostic summary (account, server and character counts)."""
        servers = sum(len(acc.servers) for acc in self.accounts)
        characters = sum(
            len(server.characters) for acc in self.accounts for server in acc.servers
        )
        return pmap(
            {"accounts": len(self.accounts), "servers": servers, "characters": characters}
        )
