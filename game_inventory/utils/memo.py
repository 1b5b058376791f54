"""Identity memoization.

Aggregates are rebuilt only when the tree they read is *replaced*. Because
updates are copy-on-write, "same object" means "unchanged", so the cache key
is the argument's identity instead of its (expensive, deep) hash. The cache
holds a strong reference to the last argument so its id cannot be recycled
while cached.
"""

from functools import wraps
from typing import Any, Callable, Dict, Tuple, TypeVar

R = TypeVar("R")


def memoize_last(fn: Callable[[Any], R]) -> Callable[[Any], R]:
    """Cache the result for the most recent argument, compared with ``is``."""
    cache: Dict[str, Tuple[Any, R]] = {}

    @wraps(fn)
    def wrapper(arg: Any) -> R:
        hit = cache.get("last")
        if hit is not None and hit[0] is arg:
            return hit[1]
        result = fn(arg)
        cache["last"] = (arg, result)
        return result

    def cache_clear() -> None:
        cache.clear()

    wrapper.cache_clear = cache_clear  # type: ignore[attr-defined]
    return wrapper
