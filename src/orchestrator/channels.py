"""
State Channels

Subscribable holders for the controller's live values (status and
curriculum). Each publish replaces the value and notifies every
subscriber in order, so consumers never see interleaved updates.
"""

import asyncio
import logging
from typing import AsyncIterator, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StateChannel(Generic[T]):
    """
    A single live value with callback and async-iterator subscribers.

    Callbacks run synchronously inside ``publish``. A callback that
    raises is logged and unsubscribed.
    """

    def __init__(self, name: str, initial: T) -> None:
        self.name = name
        self._value = initial
        self._callbacks: list[Callable[[T], None]] = []
        self._queues: set[asyncio.Queue[T]] = set()

    @property
    def value(self) -> T:
        return self._value

    def publish(self, value: T) -> None:
        """Replace the current value and notify subscribers."""
        self._value = value

        dead: list[Callable[[T], None]] = []
        for callback in list(self._callbacks):
            try:
                callback(value)
            except Exception as e:
                logger.error(f"Subscriber on '{self.name}' failed, unsubscribing: {e}")
                dead.append(callback)
        for callback in dead:
            self._unsubscribe(callback)

        for queue in list(self._queues):
            queue.put_nowait(value)

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register ``callback``; returns a function that unsubscribes it."""
        self._callbacks.append(callback)
        return lambda: self._unsubscribe(callback)

    def _unsubscribe(self, callback: Callable[[T], None]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    async def stream(self) -> AsyncIterator[T]:
        """Yield the current value, then every published value."""
        queue: asyncio.Queue[T] = asyncio.Queue()
        self._queues.add(queue)
        try:
            yield self._value
            while True:
                yield await queue.get()
        finally:
            self._queues.discard(queue)

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks) + len(self._queues)
