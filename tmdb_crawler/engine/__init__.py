"""Engine components orchestrating partition → fetch → filter → aggregate."""

from .aggregator import AggregationSummary, Aggregator, AggregatorState
from .channel import AggregationChannel
from .dedup import SecondaryIdentifierSet
from .fetcher import FetchRequest, FetchResponse, Fetcher, build_request
from .filter import MovieFilter
from .identifiers import load_identifiers
from .messages import Completion, Message, PrimaryRecord, SecondaryIdentifier
from .parser import Movie, RecordParser
from .partitioner import partition, stripe
from .thread_pool import WorkerPool
from .worker import Worker, WorkerState, WorkerStats

__all__ = [
    "AggregationChannel",
    "AggregationSummary",
    "Aggregator",
    "AggregatorState",
    "Completion",
    "FetchRequest",
    "FetchResponse",
    "Fetcher",
    "Message",
    "Movie",
    "MovieFilter",
    "PrimaryRecord",
    "RecordParser",
    "SecondaryIdentifier",
    "SecondaryIdentifierSet",
    "Worker",
    "WorkerPool",
    "WorkerState",
    "WorkerStats",
    "build_request",
    "load_identifiers",
    "partition",
    "stripe",
]
