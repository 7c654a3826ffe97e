"""Queue subsystem for handoff.

Provides the AsyncQueue handoff structure and the failures it delivers.
"""

from handoff.core.queue.async_queue import AsyncQueue
from handoff.core.queue.errors import QueueClearedError, QueueError, QueueTimeoutError

__all__ = ["AsyncQueue", "QueueClearedError", "QueueError", "QueueTimeoutError"]
