"""Reading the identifier export file into memory."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ValidationError

from ..errors import InputFormatError


class IdObject(BaseModel):
    """One ``{"id": N}`` line; other keys in the export are ignored."""

    id: int


def parse_identifier_line(line: str) -> int:
    payload = json.loads(line)
    identifier = IdObject.model_validate(payload).id
    if identifier <= 0:
        raise ValueError("id must be a positive integer")
    return identifier


def load_identifiers(path: Path) -> list[int]:
    """Read every identifier from ``path`` in file order; blank lines are skipped."""

    identifiers: list[int] = []
    with path.open("rb") as stream:
        for line_number, raw in enumerate(stream, start=1):
            try:
                line = raw.decode("utf-8").strip()
                if not line:
                    continue
                identifiers.append(parse_identifier_line(line))
            except (ValueError, ValidationError) as exc:
                raise InputFormatError(str(path), line_number, str(exc)) from exc
    return identifiers


__all__ = ["IdObject", "load_identifiers", "parse_identifier_line"]
