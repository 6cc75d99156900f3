"""Lock-guarded collection of interrupt listeners."""

from __future__ import annotations

import inspect
import threading
from typing import TYPE_CHECKING, Optional

from mcp23s17.core.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from mcp23s17.core.pin import Pin
    from mcp23s17.interfaces.bus import InterruptListener


def _same_listener(registered: object, candidate: object) -> bool:
    """Identity match; bound methods match on the same instance and function."""
    if registered is candidate:
        return True
    if inspect.ismethod(registered) and inspect.ismethod(candidate):
        return (
            registered.__self__ is candidate.__self__
            and registered.__func__ is candidate.__func__
        )
    return False


class ListenerSet:
    """Unique, ordered listener registrations with their own lock.

    Uniqueness is by object identity, never by ``==``: two equal but
    distinct callables are separate listeners. A bound method is the one
    exception, since ``obj.method`` builds a new object on every access; it
    counts as registered when the instance and function are the same.

    THREAD SAFETY: add(), remove() and notify() may be called from any
    thread. The lock is re-entrant, and notify() walks a snapshot, so a
    listener may add or remove listeners while it is being notified.
    """

    def __init__(self) -> None:
        self._listeners: list[InterruptListener] = []
        self._lock = threading.RLock()

    def _index_of(self, listener: object) -> Optional[int]:
        for index, registered in enumerate(self._listeners):
            if _same_listener(registered, listener):
                return index
        return None

    def add(self, listener: Optional[InterruptListener]) -> None:
        """Register ``listener``.

        Raises:
            InvalidArgumentError: If listener is None or already registered.
        """
        if listener is None:
            raise InvalidArgumentError("cannot add null listener")
        with self._lock:
            if self._index_of(listener) is not None:
                raise InvalidArgumentError("listener already registered")
            self._listeners.append(listener)

    def remove(self, listener: Optional[InterruptListener]) -> None:
        """Unregister ``listener``.

        Raises:
            InvalidArgumentError: If listener is None or not registered.
        """
        if listener is None:
            raise InvalidArgumentError("cannot remove null listener")
        with self._lock:
            index = self._index_of(listener)
            if index is None:
                raise InvalidArgumentError("cannot remove unregistered listener")
            del self._listeners[index]

    def notify(self, captured_value: bool, pin: Pin) -> None:
        """Call every registered listener with ``(captured_value, pin)``."""
        with self._lock:
            for listener in tuple(self._listeners):
                listener(captured_value, pin)

    def __contains__(self, listener: object) -> bool:
        with self._lock:
            return self._index_of(listener) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)
