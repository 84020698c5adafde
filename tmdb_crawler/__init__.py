"""Parallel TMDb crawler: partition → fetch → filter → aggregate."""

__version__ = "0.1.0"
