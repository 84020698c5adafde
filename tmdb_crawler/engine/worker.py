"""Per-partition worker driving fetch → decode → filter → emit."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Sequence

import structlog

from ..config import EntityKind
from ..errors import DecodeError, FetchError
from .channel import AggregationChannel
from .fetcher import Fetcher
from .filter import MovieFilter
from .messages import Completion, PrimaryRecord, SecondaryIdentifier
from .parser import RecordParser


class WorkerState(str, Enum):
    RUNNING = "running"
    FETCHING = "fetching"
    DECIDING = "deciding"
    EMITTING = "emitting"
    COMPLETING = "completing"
    DONE = "done"


class OutcomeListener(Protocol):
    def advance(self, accepted: bool = False, rejected: bool = False, failed: bool = False) -> None:
        ...


@dataclass
class WorkerStats:
    fetched: int = 0
    accepted: int = 0
    rejected: int = 0
    failed: int = 0
    secondary_sent: int = 0


class Worker:
    """Consume one partition sequentially and report into the shared channel.

    A fetch or decode failure skips the identifier. Only exhaustion of the
    partition ends the loop, after which exactly one :class:`Completion` is
    sent. A closed channel raises :class:`ChannelSendFailure` out of
    :meth:`run`.
    """

    def __init__(
        self,
        worker_id: int,
        partition: Sequence[int],
        fetcher: Fetcher,
        channel: AggregationChannel,
        kind: EntityKind,
        movie_filter: MovieFilter | None = None,
        parser: RecordParser | None = None,
        progress: OutcomeListener | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.worker_id = worker_id
        self.partition = partition
        self.fetcher = fetcher
        self.channel = channel
        self.kind = kind
        self.movie_filter = movie_filter or MovieFilter()
        self.parser = parser or RecordParser()
        self.progress = progress
        self.logger = logger or structlog.get_logger("tmdb_crawler.worker").bind(worker=worker_id)
        self.state = WorkerState.RUNNING
        self.stats = WorkerStats()

    def run(self) -> WorkerStats:
        self.logger.info("worker_started", partition_size=len(self.partition))
        try:
            for identifier in self.partition:
                self.state = WorkerState.FETCHING
                try:
                    response = self.fetcher.fetch(identifier)
                except FetchError as exc:
                    self.stats.failed += 1
                    self.logger.debug(
                        "fetch_failed", id=identifier, reason=exc.reason, status=exc.status_code
                    )
                    self._report(failed=True)
                    self.state = WorkerState.RUNNING
                    continue
                except Exception as exc:  # noqa: BLE001
                    self.stats.failed += 1
                    self.logger.warning("fetch_error", id=identifier, error=str(exc))
                    self._report(failed=True)
                    self.state = WorkerState.RUNNING
                    continue
                self.stats.fetched += 1

                self.state = WorkerState.DECIDING
                if self.kind is EntityKind.MOVIE:
                    self._handle_movie(identifier, response.text)
                else:
                    self.state = WorkerState.EMITTING
                    self.channel.send(PrimaryRecord(response.text, identifier))
                    self.stats.accepted += 1
                    self._report(accepted=True)
                self.state = WorkerState.RUNNING

            self.state = WorkerState.COMPLETING
            self.channel.send(Completion(self.worker_id))
            self.state = WorkerState.DONE
        finally:
            self.fetcher.close()
        self.logger.info(
            "worker_done",
            fetched=self.stats.fetched,
            accepted=self.stats.accepted,
            rejected=self.stats.rejected,
            failed=self.stats.failed,
        )
        return self.stats

    def _handle_movie(self, identifier: int, text: str) -> None:
        try:
            movie = self.parser.parse_movie(text)
        except DecodeError as exc:
            self.stats.rejected += 1
            self.logger.debug("decode_failed", id=identifier, error=str(exc))
            self._report(rejected=True)
            return
        if not self.movie_filter.accepts(movie):
            self.stats.rejected += 1
            self._report(rejected=True)
            return

        self.state = WorkerState.EMITTING
        self.channel.send(PrimaryRecord(text, identifier))
        for person_id in movie.cast_ids:
            self.channel.send(SecondaryIdentifier(person_id))
            self.stats.secondary_sent += 1
        self.stats.accepted += 1
        self._report(accepted=True)

    def _report(self, **outcome: bool) -> None:
        if self.progress is not None:
            self.progress.advance(**outcome)


__all__ = ["OutcomeListener", "Worker", "WorkerState", "WorkerStats"]
