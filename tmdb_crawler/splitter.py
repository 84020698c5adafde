"""Split a line-oriented file into one shard per machine."""

from __future__ import annotations

from pathlib import Path

from .engine.partitioner import stripe


def read_lines(path: Path) -> list[str]:
    """Split on ``\\n`` only; a trailing ``\\r`` is dropped from each line."""

    with path.open("r", encoding="utf-8", newline="") as stream:
        text = stream.read()
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def split_lines(lines: list[str], machines: int, machine_id: int) -> list[str]:
    """Keep every line at index ``i`` where ``i % machines == machine_id``."""

    return stripe(lines, machines, machine_id)


def split_file(input_path: Path, output_path: Path, machines: int, machine_id: int) -> int:
    """Write this machine's shard of ``input_path`` and return its line count."""

    shard = split_lines(read_lines(input_path), machines, machine_id)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8", newline="\n") as stream:
        for line in shard:
            stream.write(line)
            stream.write("\n")
    return len(shard)


__all__ = ["read_lines", "split_file", "split_lines"]
