"""Messages carried on the aggregation channel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class Completion:
    """A worker has exhausted its partition. Always the worker's last message."""

    worker_id: int


@dataclass(frozen=True, slots=True)
class SecondaryIdentifier:
    """An identifier discovered inside an accepted primary record."""

    identifier: int


@dataclass(frozen=True, slots=True)
class PrimaryRecord:
    """Raw payload text of an accepted record, written verbatim."""

    text: str
    identifier: int | None = None


Message = Union[Completion, SecondaryIdentifier, PrimaryRecord]

__all__ = ["Completion", "Message", "PrimaryRecord", "SecondaryIdentifier"]
