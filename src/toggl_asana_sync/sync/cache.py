"""Per-run memoization cache."""

from collections.abc import Callable
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class RunCache(Generic[K, V]):
    """Memoizes remote lookups for the lifetime of one sync run.

    Only successful lookups are stored; a failing fetch raises and is retried
    the next time the key is requested.
    """

    def __init__(self) -> None:
        self._values: dict[K, V] = {}

    def get_or_fetch(self, key: K, fetch: Callable[[], V]) -> V:
        """Return the cached value for key, calling fetch on a miss.

        Args:
            key: Cache key.
            fetch: Zero-argument callable producing the value.

        Returns:
            Cached or freshly fetched value.
        """
        if key not in self._values:
            self._values[key] = fetch()
        return self._values[key]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)
