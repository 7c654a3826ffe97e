"""FIFO handoff queue pairing asynchronous producers with waiting consumers."""

import asyncio
import inspect
from collections import deque
from collections.abc import AsyncIterator, Awaitable, Iterable
from functools import partial
from typing import Any, Generic, TypeVar

from handoff.core.config.models import QueueConfig
from handoff.core.logging import get_queue_logger
from handoff.core.queue.errors import QueueClearedError, QueueTimeoutError

T = TypeVar("T")


class AsyncQueue(Generic[T]):
    """Unbounded FIFO queue that hands values to consumers without polling.

    Holds two sequences that are never both populated: values nobody has
    claimed yet, and waiters (futures returned by ``next()``) that have not
    received a value yet. ``add`` feeds the oldest waiter or buffers;
    ``next`` takes the oldest buffered value or registers a waiter.

    All operations are synchronous steps on the event loop, so no lock is
    needed. Failures (timeout, clear) are delivered only through the
    future returned by ``next()``.
    """

    def __init__(
        self,
        initial: Iterable[T] | None = None,
        *,
        name: str = "queue",
        default_timeout_ms: float | None = None,
    ):
        """Initialize the queue.

        Args:
            initial: Values to seed the queue with, delivered first in order.
            name: Label used in log messages and repr.
            default_timeout_ms: Timeout applied when ``next()`` is called
                without one. None or 0 means wait indefinitely.
        """
        self.name = name
        self.default_timeout_ms = default_timeout_ms
        self._buffered: deque[T | Awaitable[T]] = deque()
        self._waiters: deque[asyncio.Future[T]] = deque()
        self._resolving: set[asyncio.Future[T]] = set()
        self._logger = get_queue_logger(name)

        for value in initial or ():
            self.add(value)

    @classmethod
    def from_config(cls, config: QueueConfig, initial: Iterable[T] | None = None) -> "AsyncQueue[T]":
        """Create a queue from a QueueConfig section."""
        return cls(initial, name=config.name, default_timeout_ms=config.default_timeout_ms)

    def __repr__(self) -> str:
        return f"<AsyncQueue {self.name!r} buffered={self.size} waiting={self.waiting}>"

    def __len__(self) -> int:
        return len(self._buffered)

    @property
    def size(self) -> int:
        """Number of buffered values. Pending waiters are not counted."""
        return len(self._buffered)

    @property
    def is_empty(self) -> bool:
        return self.size == 0

    @property
    def waiting(self) -> int:
        """Number of consumers currently blocked in ``next()``."""
        return sum(1 for waiter in self._waiters if not waiter.done())

    def add(self, value: T | Awaitable[T]) -> None:
        """Hand a value to the oldest waiter, or buffer it if nobody waits.

        Awaitables (coroutines, tasks, futures) are accepted; the consumer
        receives their result rather than the awaitable itself.

        Args:
            value: The value, or an awaitable producing it.
        """
        while self._waiters:
            waiter = self._waiters.popleft()
            # Consumers may have cancelled their future while it was queued
            if waiter.done():
                continue
            self._fulfill(waiter, value)
            self._logger.debug(f"Delivered value to waiter ({len(self._waiters)} still waiting)")
            return

        self._buffered.append(value)
        self._logger.debug(f"Buffered value ({len(self._buffered)} buffered)")

    def next(self, timeout_ms: float | None = None) -> asyncio.Future[T]:
        """Claim the next value.

        Registration is immediate: the claim takes its place in line when
        ``next()`` is called, not when the returned future is awaited.
        Must be called while an event loop is running.

        Args:
            timeout_ms: Milliseconds to wait before failing. None falls back
                to ``default_timeout_ms``; 0 waits indefinitely.

        Returns:
            Future resolving to the value. It fails with QueueTimeoutError
            if the timeout elapses first, or QueueClearedError if the queue
            is cleared while waiting.

        Raises:
            ValueError: If timeout_ms is negative.
        """
        if timeout_ms is None:
            timeout_ms = self.default_timeout_ms
        if timeout_ms is not None and timeout_ms < 0:
            raise ValueError(f"timeout_ms must be >= 0, got {timeout_ms}")

        loop = asyncio.get_running_loop()
        waiter: asyncio.Future[T] = loop.create_future()

        if self._buffered:
            self._fulfill(waiter, self._buffered.popleft())
            return waiter

        self._waiters.append(waiter)
        waiter.add_done_callback(self._forget)

        if timeout_ms:
            handle = loop.call_later(timeout_ms / 1000.0, self._expire, waiter)
            waiter.add_done_callback(lambda _: handle.cancel())

        return waiter

    def peek(self, default: Any = None) -> T | Any:
        """Return the oldest buffered value without removing it.

        peek is an inspection aid, not a way to consume: an awaitable payload
        is returned as the unresolved awaitable that was passed to ``add``.
        Do not await it; claim it with ``next()``, which delivers the
        resolved result.

        Args:
            default: Returned when nothing is buffered.
        """
        if not self._buffered:
            return default
        return self._buffered[0]

    def clear(self) -> None:
        """Drop all buffered values and fail every pending waiter.

        Waiters receive QueueClearedError. The queue stays usable afterwards.
        """
        dropped = len(self._buffered)
        for value in self._buffered:
            # Unclaimed coroutines would otherwise warn about never being awaited
            if inspect.iscoroutine(value):
                value.close()
        self._buffered.clear()

        waiters = list(self._waiters)
        self._waiters.clear()
        aborted = 0
        for waiter in waiters:
            if not waiter.done():
                waiter.set_exception(QueueClearedError())
                aborted += 1

        self._logger.debug(f"Queue cleared: dropped {dropped} value(s), aborted {aborted} waiter(s)")

    def get_stats(self) -> dict[str, int]:
        """Get current queue statistics."""
        return {"buffered": self.size, "waiting": self.waiting}

    async def __aiter__(self) -> AsyncIterator[T]:
        """Yield values as they arrive until the queue is cleared."""
        while True:
            waiter = self.next(0)
            try:
                item = await waiter
            except QueueClearedError:
                return
            finally:
                # Leaves no orphaned waiter behind if the consumer stops early
                waiter.cancel()
            yield item

    def _fulfill(self, waiter: asyncio.Future[T], value: T | Awaitable[T]) -> None:
        if inspect.isawaitable(value):
            pending = asyncio.ensure_future(value, loop=waiter.get_loop())
            self._resolving.add(pending)
            pending.add_done_callback(self._resolving.discard)
            pending.add_done_callback(partial(self._settle, waiter))
        else:
            waiter.set_result(value)

    def _settle(self, waiter: asyncio.Future[T], pending: asyncio.Future[T]) -> None:
        """Settle a waiter with the outcome of an awaitable payload.

        If the consumer gave up while the payload was resolving, a
        successful result goes back through ``add`` so it is not lost.
        """
        if pending.cancelled():
            if not waiter.done():
                waiter.cancel()
            return

        error = pending.exception()
        if not waiter.done():
            if error is not None:
                waiter.set_exception(error)
            else:
                waiter.set_result(pending.result())
        elif error is None:
            self._logger.debug("Waiter cancelled while payload resolved; re-queueing value")
            self.add(pending.result())

    def _forget(self, waiter: asyncio.Future[T]) -> None:
        if waiter in self._waiters:
            self._waiters.remove(waiter)

    def _expire(self, waiter: asyncio.Future[T]) -> None:
        # Already handed a value (possibly still resolving) or cleared
        if waiter.done() or waiter not in self._waiters:
            return
        self._waiters.remove(waiter)
        waiter.set_exception(QueueTimeoutError())
        self._logger.debug(f"Waiter timed out ({len(self._waiters)} still waiting)")
