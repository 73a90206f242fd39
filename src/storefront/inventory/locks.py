"""Keyed mutual exclusion for stock and order mutations.

Locks are process-wide, created on first use and dropped once no caller
holds or waits on them. A single ``hold`` call acquires its keys in sorted
order, so two callers with overlapping key sets cannot deadlock. Callers that
nest ``hold`` calls must always take order keys before product keys.
"""

import threading
from collections import Counter
from contextlib import contextmanager


class KeyedLocks:
    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._users: Counter[str] = Counter()

    def _checkout(self, key: str) -> threading.Lock:
        with self._guard:
            self._users[key] += 1
            return self._locks.setdefault(key, threading.Lock())

    def _checkin(self, key: str) -> None:
        with self._guard:
            self._users[key] -= 1
            if self._users[key] <= 0:
                del self._users[key]
                del self._locks[key]

    @contextmanager
    def hold(self, *keys: str):
        acquired = []
        try:
            for key in sorted(set(keys)):
                lock = self._checkout(key)
                try:
                    lock.acquire()
                except BaseException:
                    self._checkin(key)
                    raise
                acquired.append((key, lock))
            yield
        finally:
            for key, lock in reversed(acquired):
                lock.release()
                self._checkin(key)


def order_key(order_id) -> str:
    return f"order:{order_id}"


def product_key(product_id) -> str:
    return f"product:{product_id}"


locks = KeyedLocks()
