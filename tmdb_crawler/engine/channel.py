"""Multi-producer / single-consumer aggregation channel."""

from __future__ import annotations

import queue
from threading import Lock
from typing import Iterator

from ..errors import ChannelSendFailure
from .messages import Message


class AggregationChannel:
    """Unbounded FIFO shared by all workers and read by the aggregator.

    Sends are never dropped while the channel is open. Once closed, any
    further send raises :class:`ChannelSendFailure`.
    """

    def __init__(self) -> None:
        self._queue: queue.Queue[Message] = queue.Queue()
        self._lock = Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, message: Message) -> None:
        # Holding the lock makes close() a barrier: no put lands after it returns
        with self._lock:
            if self._closed:
                raise ChannelSendFailure(f"channel closed, cannot send {type(message).__name__}")
            self._queue.put_nowait(message)

    def receive(self, timeout: float | None = None) -> Message:
        """Block for the next message; raises ``queue.Empty`` on timeout."""

        return self._queue.get(timeout=timeout)

    def close(self) -> None:
        with self._lock:
            self._closed = True

    def drain(self) -> Iterator[Message]:
        """Yield messages still queued, without blocking."""

        while True:
            try:
                yield self._queue.get_nowait()
            except queue.Empty:
                return


__all__ = ["AggregationChannel"]
