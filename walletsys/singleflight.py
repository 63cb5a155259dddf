"""Duplicate call suppression: concurrent calls with one key share one result."""

from __future__ import annotations

import threading
from typing import Any, Callable


class _Call:
    __slots__ = ("done", "value", "error", "dups")

    def __init__(self) -> None:
        self.done = threading.Event()
        self.value: Any = None
        self.error: BaseException | None = None
        self.dups = 0


class SingleFlight:
    """Runs a function once per key while other callers for that key wait."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: dict[str, _Call] = {}

    def do(self, key: str, fn: Callable[[], Any]) -> tuple[Any, bool]:
        """Run ``fn`` for ``key`` or wait for the call already in flight.

        Returns ``(value, shared)``; ``shared`` is true when more than one
        caller received the value. Errors from ``fn`` are raised to every
        caller, and the key is forgotten so the next call runs afresh.
        """
        with self._lock:
            call = self._calls.get(key)
            if call is not None:
                call.dups += 1
                leader = False
            else:
                call = _Call()
                self._calls[key] = call
                leader = True

        if not leader:
            call.done.wait()
            if call.error is not None:
                raise call.error
            return call.value, True

        try:
            call.value = fn()
        except BaseException as exc:
            call.error = exc
        finally:
            with self._lock:
                if self._calls.get(key) is call:
                    del self._calls[key]
                shared = call.dups > 0
            call.done.set()

        if call.error is not None:
            self.forget(key)
            raise call.error
        return call.value, shared

    def forget(self, key: str) -> None:
        """Drop ``key`` so later calls do not wait for an earlier one."""
        with self._lock:
            self._calls.pop(key, None)