"""Compute-once cell for lazily populated, immutable fields."""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

_UNSET = object()


class OnceCell(Generic[T]):
    """Holds a value computed on first access.

    Concurrent first accesses block on a lock; exactly one initialiser runs
    and every caller observes its result. If the initialiser raises, the
    cell stays empty and the next caller retries.
    """

    __slots__ = ("_value", "_lock")

    def __init__(self) -> None:
        self._value: object = _UNSET
        self._lock = threading.Lock()

    def get_or_init(self, init: Callable[[], T]) -> T:
        value = self._value
        if value is not _UNSET:
            return value  # type: ignore[return-value]
        with self._lock:
            if self._value is _UNSET:
                self._value = init()
            return self._value  # type: ignore[return-value]
