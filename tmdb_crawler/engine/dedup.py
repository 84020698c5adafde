"""In-memory deduplication of secondary identifiers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class SecondaryIdentifierSet:
    """Set of discovered identifiers, owned by the aggregator alone.

    No locking: only the aggregating thread ever touches it.
    """

    _seen: set[int] = field(default_factory=set)
    duplicates: int = 0

    def add(self, identifier: int) -> bool:
        """Insert ``identifier``; return ``False`` if it was already present."""

        if identifier in self._seen:
            self.duplicates += 1
            return False
        self._seen.add(identifier)
        return True

    def __iter__(self) -> Iterator[int]:
        return iter(self._seen)

    def __len__(self) -> int:
        return len(self._seen)


__all__ = ["SecondaryIdentifierSet"]
