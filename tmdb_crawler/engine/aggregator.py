"""Single consumer reconciling every worker's messages into the output sinks."""

from __future__ import annotations

import queue
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import structlog

from ..errors import AggregationError
from .channel import AggregationChannel
from .dedup import SecondaryIdentifierSet
from .exporter import BaseExporter
from .messages import Completion, Message, PrimaryRecord, SecondaryIdentifier


class AggregatorState(str, Enum):
    DRAINING = "draining"
    DONE = "done"


@dataclass
class AggregationSummary:
    records: int = 0
    secondary_received: int = 0
    secondary_unique: int = 0
    completions: int = 0
    late_messages: int = 0


class Aggregator:
    """Drain the channel until every worker has reported completion.

    Primary records are streamed to ``record_sink`` as they arrive. Secondary
    identifiers are deduplicated and flushed to ``identifier_sink`` once the
    run is done. After the last completion the channel is closed and anything
    still queued is processed before the sinks are flushed.
    """

    def __init__(
        self,
        channel: AggregationChannel,
        workers: int,
        record_sink: BaseExporter,
        identifier_sink: BaseExporter | None = None,
        poll_interval: float = 0.5,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        if workers < 1:
            raise ValueError("workers must be >= 1")
        self.channel = channel
        self.workers = workers
        self.record_sink = record_sink
        self.identifier_sink = identifier_sink
        self.poll_interval = poll_interval
        self.logger = logger or structlog.get_logger("tmdb_crawler.aggregator")
        self.secondary_ids = SecondaryIdentifierSet()
        self.state = AggregatorState.DRAINING
        self.summary = AggregationSummary()

    @property
    def done(self) -> bool:
        return self.state is AggregatorState.DONE

    def run(self, producers_alive: Callable[[], bool] | None = None) -> AggregationSummary:
        """Consume until ``workers`` completions have been seen.

        ``producers_alive`` lets the aggregator notice workers that died
        without sending their completion; without it the loop blocks until
        the count is reached.
        """

        while not self.done:
            try:
                message = self.channel.receive(timeout=self.poll_interval)
            except queue.Empty:
                if producers_alive is None or producers_alive():
                    continue
                # Every producer has exited, so the queue content is final
                for message in self.channel.drain():
                    self.handle(message)
                    if self.done:
                        break
                if not self.done:
                    raise AggregationError(
                        f"workers exited after {self.summary.completions} of "
                        f"{self.workers} completion markers"
                    )
                break
            self.handle(message)

        self.channel.close()
        for message in self.channel.drain():
            self.summary.late_messages += 1
            self.handle(message)
        if self.summary.late_messages:
            self.logger.warning("late_messages_drained", count=self.summary.late_messages)

        self.flush()
        self.logger.info(
            "aggregation_done",
            records=self.summary.records,
            secondary_unique=self.summary.secondary_unique,
            completions=self.summary.completions,
        )
        return self.summary

    def handle(self, message: Message) -> None:
        if isinstance(message, Completion):
            if self.done:
                self.logger.warning("unexpected_completion", worker=message.worker_id)
                return
            self.summary.completions += 1
            self.logger.debug(
                "worker_completed", worker=message.worker_id, completions=self.summary.completions
            )
            if self.summary.completions == self.workers:
                self.state = AggregatorState.DONE
        elif isinstance(message, SecondaryIdentifier):
            self.summary.secondary_received += 1
            self.secondary_ids.add(message.identifier)
        elif isinstance(message, PrimaryRecord):
            self.record_sink.export(message.text)
            self.summary.records += 1
        else:
            raise TypeError(f"Unknown message type: {type(message).__name__}")

    def flush(self) -> None:
        self.record_sink.flush()
        if self.identifier_sink is not None:
            self.identifier_sink.export_many(self.secondary_ids)
            self.identifier_sink.flush()
        self.summary.secondary_unique = len(self.secondary_ids)


__all__ = ["AggregationSummary", "Aggregator", "AggregatorState"]
