"""Thread pool running one worker per partition."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, wait
from threading import Lock
from typing import Callable, List, TypeVar

T = TypeVar("T")


class WorkerPool:
    """Fixed-size executor sized to the partition count.

    Every submitted task gets its own thread, so no partition ever waits for
    another to finish.
    """

    def __init__(self, workers: int, thread_name_prefix: str = "crawler") -> None:
        if workers < 1:
            raise ValueError("workers must be >= 1")
        self.workers = workers
        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix=thread_name_prefix)
        self._futures: List[Future] = []
        self._lock = Lock()

    def submit(self, fn: Callable[[], T]) -> Future[T]:
        with self._lock:
            if len(self._futures) >= self.workers:
                raise RuntimeError(f"WorkerPool already holds {self.workers} tasks")
            future = self._executor.submit(fn)
            self._futures.append(future)
            return future

    def alive(self) -> bool:
        """Return ``True`` while any submitted task is still running."""

        with self._lock:
            return any(not future.done() for future in self._futures)

    def join(self) -> list:
        """Wait for every task and return their results in submission order.

        The first task exception is re-raised.
        """

        with self._lock:
            futures = list(self._futures)
        wait(futures)
        return [future.result() for future in futures]

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()


__all__ = ["WorkerPool"]
