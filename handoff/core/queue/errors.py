"""Failures delivered to pending consumers of an AsyncQueue."""


class QueueError(Exception):
    """Base class for queue failures."""


class QueueTimeoutError(QueueError, TimeoutError):
    """Raised to a single waiter whose timeout elapsed before a value arrived.

    Subclasses the builtin TimeoutError so callers already catching
    asyncio timeouts handle it too.
    """

    def __init__(self, message: str = "Timeout"):
        super().__init__(message)


class QueueClearedError(QueueError):
    """Raised to every waiter still pending when the queue is cleared."""

    def __init__(self, message: str = "Queue cleared"):
        super().__init__(message)
