"""Bounded blocking channel used between the engine and player workers."""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Generic, TypeVar

T = TypeVar("T")


class ChannelClosed(RuntimeError):
    """Raised when sending on, or receiving from, a disconnected channel."""


class Channel(Generic[T]):
    """Blocking FIFO holding at most ``capacity`` in-flight messages.

    ``send`` blocks while the buffer is full and ``recv`` blocks while it is
    empty. Once closed, pending messages can still be received; afterwards
    both ends raise ChannelClosed.
    """

    def __init__(self, capacity: int = 1, *, name: str = "channel") -> None:
        if capacity < 1:
            raise ValueError("Channel capacity must be at least 1.")
        self.capacity = capacity
        self.name = name
        self._items: Deque[T] = deque()
        self._closed = False
        self._cond = threading.Condition()

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def send(self, item: T) -> None:
        with self._cond:
            while len(self._items) >= self.capacity and not self._closed:
                self._cond.wait()
            if self._closed:
                raise ChannelClosed(f"{self.name} is closed.")
            self._items.append(item)
            self._cond.notify_all()

    def recv(self) -> T:
        with self._cond:
            while not self._items and not self._closed:
                self._cond.wait()
            if not self._items:
                raise ChannelClosed(f"{self.name} is closed.")
            item = self._items.popleft()
            self._cond.notify_all()
            return item

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()
