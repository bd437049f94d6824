"""Client-side query cache.

Reads are cached under tuple keys whose first element names the logical
resource (``("articles", 2, "", None)``, ``("categories",)``). The cache:

- de-duplicates concurrent reads of the same key (one request, shared result),
- retries a read exactly once when the network fails,
- is invalidated by key prefix after writes: idle entries are dropped, so
  the next read refetches and old filter/page keys do not accumulate.

Mutations go through ``mutate``, which never retries and never patches the
cache; callers invalidate the keys they affect.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, TypeVar

from newsdesk.errors import NetworkError

logger = logging.getLogger(__name__)

T = TypeVar("T")
QueryKey = tuple[Hashable, ...]


@dataclass
class _Entry:
    data: Any = None
    stale: bool = False
    in_flight: Future | None = None
    fetch_count: int = 0


def _matches(key: QueryKey, prefix: QueryKey) -> bool:
    return key[: len(prefix)] == prefix


class QueryClient:
    """Keyed read cache shared by all pages."""

    def __init__(self, retries: int = 1) -> None:
        self.retries = retries
        self._entries: dict[QueryKey, _Entry] = {}
        self._lock = threading.Lock()

    def fetch(self, key: QueryKey, fn: Callable[[], T], *, force: bool = False) -> T:
        """Return cached data for ``key``, fetching it when missing or stale.

        Args:
            key: Query key; its first element is the resource name.
            fn: Zero-argument reader that performs the request.
            force: Refetch even when a fresh entry exists.

        Returns:
            The (possibly cached) result of ``fn``.
        """
        with self._lock:
            entry = self._entries.setdefault(key, _Entry())
            if entry.in_flight is not None:
                future = entry.in_flight
                owner = False
            elif entry.fetch_count and not entry.stale and not force:
                return entry.data
            else:
                future = Future()
                entry.in_flight = future
                owner = True

        if not owner:
            logger.debug("Joining in-flight query %s", key)
            return future.result()

        try:
            data = self._run_with_retry(key, fn)
        except BaseException as exc:
            with self._lock:
                entry.in_flight = None
                if not entry.fetch_count:
                    self._entries.pop(key, None)
            future.set_exception(exc)
            raise

        with self._lock:
            entry.data = data
            entry.stale = False
            entry.fetch_count += 1
            entry.in_flight = None
        future.set_result(data)
        return data

    def _run_with_retry(self, key: QueryKey, fn: Callable[[], T]) -> T:
        attempt = 0
        while True:
            try:
                return fn()
            except NetworkError as exc:
                if attempt >= self.retries:
                    raise
                attempt += 1
                logger.warning(
                    "Query %s failed (attempt %d/%d): %s; retrying",
                    key,
                    attempt,
                    self.retries + 1,
                    exc,
                )

    def mutate(self, fn: Callable[[], T], *, invalidates: tuple[QueryKey, ...] = ()) -> T:
        """Run a write once and invalidate ``invalidates`` on success."""
        result = fn()
        for prefix in invalidates:
            self.invalidate(prefix)
        return result

    def invalidate(self, prefix: QueryKey) -> int:
        """Drop every entry whose key starts with ``prefix``.

        An entry with a read in flight is kept but marked stale, so callers
        joining that read still share its result.

        Returns:
            Number of entries invalidated.
        """
        marked = 0
        with self._lock:
            for key in [k for k in self._entries if _matches(k, prefix)]:
                entry = self._entries[key]
                if entry.in_flight is None:
                    del self._entries[key]
                else:
                    entry.stale = True
                marked += 1
        logger.debug("Invalidated %d entries under %s", marked, prefix)
        return marked

    def get_data(self, key: QueryKey) -> Any:
        """Return cached data for ``key`` without fetching (None if absent)."""
        with self._lock:
            entry = self._entries.get(key)
            return entry.data if entry is not None else None

    def is_stale(self, key: QueryKey) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is None or entry.stale or not entry.fetch_count

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
