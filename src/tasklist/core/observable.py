# src/tasklist/core/observable.py

from __future__ import annotations

import logging
import threading
from typing import Generic, TypeVar

from .ports import StateObserver, Unsubscribe

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StateFlow(Generic[T]):
    """
    Holds the latest value and notifies subscribers when a new one is published.

    - `value` is always the last complete snapshot.
    - `subscribe()` immediately replays the current value to the new observer.
    - with `distinct=True`, publishing an equal value is ignored.

    An observer that raises is logged and skipped; the others still run.
    """

    def __init__(self, initial: T, *, distinct: bool = False) -> None:
        self._value = initial
        self._distinct = distinct
        self._observers: list[StateObserver[T]] = []
        self._lock = threading.Lock()

    @property
    def value(self) -> T:
        return self._value

    def publish(self, value: T) -> bool:
        """Set a new value. Returns False if it was dropped as a duplicate."""
        with self._lock:
            if self._distinct and value == self._value:
                return False
            self._value = value
            observers = list(self._observers)

        for obs in observers:
            try:
                obs(value)
            except Exception:
                logger.exception("State observer %r failed", obs)
        return True

    def subscribe(self, observer: StateObserver[T]) -> Unsubscribe:
        with self._lock:
            self._observers.append(observer)
            current = self._value

        try:
            observer(current)
        except Exception:
            logger.exception("State observer %r failed on replay", observer)

        def _unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return _unsubscribe
