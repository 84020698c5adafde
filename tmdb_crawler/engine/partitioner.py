"""Striped work partitioning across a fixed number of workers."""

from __future__ import annotations

from typing import Sequence, TypeVar

T = TypeVar("T")


def stripe(items: Sequence[T], count: int, index: int) -> list[T]:
    """Return every item whose position ``i`` satisfies ``i % count == index``."""

    if count < 1:
        raise ValueError("stripe count must be >= 1")
    if not 0 <= index < count:
        raise ValueError(f"stripe index must be in [0, {count}), got {index}")
    return list(items[index::count])


def partition(items: Sequence[T], workers: int) -> list[list[T]]:
    """Split ``items`` into ``workers`` disjoint, order-preserving stripes.

    Striping instead of contiguous blocks spreads any positional skew in the
    input evenly across workers. Partitions may be empty when ``workers``
    exceeds ``len(items)``.
    """

    if workers < 1:
        raise ValueError("workers must be >= 1")
    return [stripe(items, workers, index) for index in range(workers)]


__all__ = ["partition", "stripe"]
