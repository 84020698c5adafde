"""Exporter Service Provider Interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Iterable, TypeVar

T = TypeVar("T")


class BaseExporter(ABC, Generic[T]):
    """Uniform append-only sink contract enabling plug-and-play outputs."""

    @abstractmethod
    def export(self, record: T) -> None:
        """Persist a single record."""

    def export_many(self, records: Iterable[T]) -> None:
        for record in records:
            self.export(record)

    @abstractmethod
    def flush(self) -> None:
        """Flush buffered data to destination."""

    @abstractmethod
    def close(self) -> None:
        """Release underlying resources."""

    def __enter__(self) -> "BaseExporter[T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["BaseExporter"]
