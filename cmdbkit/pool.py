"""A bounded pool of closable resources."""

from __future__ import annotations

import queue
import threading
from datetime import timedelta
from typing import Any, Callable, Protocol


class Closer(Protocol):
    def close(self) -> Any: ...


class PoolError(Exception):
    """Base error of the pool."""


class InvalidPoolConfig(PoolError):
    """The pool limits are inconsistent."""

    def __init__(self) -> None:
        super().__init__("invalid pool config")


class PoolClosed(PoolError):
    """The pool has been shut down."""

    def __init__(self) -> None:
        super().__init__("pool closed")


class GenericPool:
    """Hands out resources made by a factory, at most ``max_open`` at a time."""

    def __init__(
        self,
        min_open: int,
        max_open: int,
        max_lifetime: timedelta | float,
        factory: Callable[[], Closer],
    ) -> None:
        if max_open <= 0 or min_open > max_open:
            raise InvalidPoolConfig()
        self.min_open = min_open
        self.max_open = max_open
        self.max_lifetime = (
            max_lifetime if isinstance(max_lifetime, timedelta) else timedelta(seconds=max_lifetime)
        )
        self._factory = factory
        self._idle: queue.Queue[Closer] = queue.Queue(maxsize=max_open)
        self._lock = threading.Lock()
        self._num_open = 0
        self._closed = False

        for _ in range(min_open):
            try:
                closer = factory()
            except Exception:
                continue
            self._num_open += 1
            self._idle.put(closer)

    @property
    def num_open(self) -> int:
        """Number of resources currently open, idle or lent out."""
        return self._num_open

    def acquire(self) -> Closer:
        """Take an idle resource, create one, or wait for one to be released."""
        if self._closed:
            raise PoolClosed()
        try:
            return self._idle.get_nowait()
        except queue.Empty:
            pass
        with self._lock:
            if self._num_open < self.max_open:
                closer = self._factory()
                self._num_open += 1
                return closer
        return self._idle.get()

    def release(self, closer: Closer) -> None:
        """Give a resource back to the pool."""
        if self._closed:
            raise PoolClosed()
        self._idle.put(closer)

    def close(self, closer: Closer) -> None:
        """Close a resource for good instead of returning it."""
        with self._lock:
            closer.close()
            self._num_open -= 1

    def shutdown(self) -> None:
        """Close every idle resource and refuse further use."""
        if self._closed:
            raise PoolClosed()
        with self._lock:
            self._closed = True
            while True:
                try:
                    closer = self._idle.get_nowait()
                except queue.Empty:
                    break
                closer.close()
                self._num_open -= 1