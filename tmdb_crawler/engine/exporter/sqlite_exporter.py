"""Export accepted payloads to a SQLite table."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from .base import BaseExporter


class SQLiteExporter(BaseExporter):
    """Persist raw payloads as TEXT rows; commits on flush.

    The table is emptied when the exporter is created, like the line sinks.
    """

    def __init__(self, path: Path, table: str = "records") -> None:
        if not table.isidentifier():
            raise ValueError(f"Invalid table name: {table!r}")
        self.path = path
        self.table = table
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.path)
        self.conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {self.table} (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                payload TEXT NOT NULL
            )
            """
        )
        self.conn.execute(f"DELETE FROM {self.table}")
        self.conn.commit()

    def export(self, record: str) -> None:
        self.conn.execute(f"INSERT INTO {self.table}(payload) VALUES (?)", (record,))

    def flush(self) -> None:
        self.conn.commit()

    def close(self) -> None:
        self.conn.commit()
        self.conn.close()


__all__ = ["SQLiteExporter"]
