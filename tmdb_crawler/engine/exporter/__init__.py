"""Exporter SPI and implementations."""

from .base import BaseExporter
from .file_exporter import IdentifierFileExporter, RecordFileExporter
from .sqlite_exporter import SQLiteExporter

__all__ = ["BaseExporter", "IdentifierFileExporter", "RecordFileExporter", "SQLiteExporter"]
