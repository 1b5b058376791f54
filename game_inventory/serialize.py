"""Persistence boundary: canonical tree → plain document.

The remote document store accepts JSON-like values only and rejects
undefined leaves, so writes go through :func:`to_document`, which turns
dataclasses into camelCase dicts, persistent collections into lists/dicts and
drops ``None`` leaves. ``Slot.item`` is the exception: an empty slot is
stored as an explicit ``null``.

The reverse direction is :func:`game_inventory.normalize.load_state`.
"""

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Dict, Mapping

from pyrsistent import PMap, PVector, thaw

from game_inventory.models import Slot
from game_inventory.state import InventoryState

# (owner type, field) pairs written as explicit nulls.
_KEEP_NULL = {(Slot, "item")}


def camel_case(name: str) -> str:
    """``learned_recipes`` → ``learnedRecipes``."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_document(value: Any) -> Any:
    """Convert a model value (or any nesting of them) into a storable document."""
    if is_dataclass(value) and not isinstance(value, type):
        out: Dict[str, Any] = {}
        for f in fields(value):
            val = getattr(value, f.name)
            if val is None:
                if (type(value), f.name) in _KEEP_NULL:
                    out[camel_case(f.name)] = None
                continue
            out[camel_case(f.name)] = to_document(val)
        return out
    if isinstance(value, (PVector, PMap)):
        return to_document(thaw(value))
    if isinstance(value, Mapping):
        return {str(key): to_document(val) for key, val in value.items() if val is not None}
    if isinstance(value, (list, tuple)):
        return [to_document(item) for item in value]
    if isinstance(value, Enum):
        return value.value
    return value


def strip_none_deep(value: Any) -> Any:
    """Drop ``None`` values from every mapping nested in a plain document.

    List elements are kept as-is (an explicit ``null`` in an array is valid).
    """
    if isinstance(value, Mapping):
        return {key: strip_none_deep(val) for key, val in value.items() if val is not None}
    if isinstance(value, (list, tuple)):
        return [strip_none_deep(item) for item in value]
    return value


def accounts_document(state: InventoryState) -> Dict[str, Any]:
    """Payload merged into the user document on save."""
    return {"accounts": to_document(state.accounts)}
