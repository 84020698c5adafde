"""Exception hierarchy shared by the crawl pipeline."""

from __future__ import annotations


class CrawlerError(Exception):
    """Base class for all crawler errors."""


class StartupConfigurationError(CrawlerError):
    """Missing or malformed configuration detected before any work begins."""


class InputFormatError(StartupConfigurationError):
    """The identifier input file contains a line that is not an ``{"id": N}`` object."""

    def __init__(self, path: str, line_number: int, reason: str) -> None:
        super().__init__(f"{path}:{line_number}: {reason}")
        self.path = path
        self.line_number = line_number
        self.reason = reason


class FetchError(CrawlerError):
    """A single identifier could not be fetched (transport, status or body failure)."""

    def __init__(self, identifier: int, reason: str, status_code: int | None = None) -> None:
        super().__init__(f"Fetch failed for id {identifier}: {reason}")
        self.identifier = identifier
        self.reason = reason
        self.status_code = status_code


class DecodeError(CrawlerError):
    """A payload does not match the expected record shape."""


class ChannelSendFailure(CrawlerError):
    """A worker tried to send on an aggregation channel that is already closed."""


class AggregationError(CrawlerError):
    """Workers exited without delivering every completion marker."""


__all__ = [
    "AggregationError",
    "ChannelSendFailure",
    "CrawlerError",
    "DecodeError",
    "FetchError",
    "InputFormatError",
    "StartupConfigurationError",
]
