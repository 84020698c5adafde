"""Line-oriented file sinks for primary records and discovered identifiers."""

from __future__ import annotations

import json
from pathlib import Path

from .base import BaseExporter


class _LineFileExporter(BaseExporter):
    def __init__(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Truncate: every run produces a fresh output file
        self._file = self.path.open("w", encoding="utf-8", newline="\n")
        self.count = 0

    def _write_line(self, line: str) -> None:
        self._file.write(line)
        self._file.write("\n")
        self.count += 1

    def flush(self) -> None:
        self._file.flush()

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()


class RecordFileExporter(_LineFileExporter):
    """Write each accepted payload verbatim, one per line."""

    def export(self, record: str) -> None:
        self._write_line(record)


class IdentifierFileExporter(_LineFileExporter):
    """Write identifiers as ``{"id": N}`` lines, the same shape the crawler reads."""

    def export(self, record: int) -> None:
        self._write_line(json.dumps({"id": int(record)}))


__all__ = ["IdentifierFileExporter", "RecordFileExporter"]
