"""Run orchestrator wiring partitioning, workers, aggregation and export."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

import structlog

from .config import CrawlConfig, EntityKind
from .engine import (
    AggregationChannel,
    Aggregator,
    Fetcher,
    MovieFilter,
    Worker,
    WorkerPool,
    WorkerStats,
    load_identifiers,
    partition,
)
from .engine.exporter import BaseExporter, IdentifierFileExporter, RecordFileExporter, SQLiteExporter
from .errors import AggregationError
from .logging_conf import worker_logger
from .ui import ProgressReporter

FetcherFactory = Callable[[int], Fetcher]


@dataclass
class CrawlSummary:
    identifiers: int
    workers: int
    fetched: int = 0
    accepted: int = 0
    rejected: int = 0
    failed: int = 0
    records_written: int = 0
    secondary_unique: int = 0
    late_messages: int = 0
    elapsed: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return {
            "identifiers": self.identifiers,
            "workers": self.workers,
            "fetched": self.fetched,
            "accepted": self.accepted,
            "rejected": self.rejected,
            "failed": self.failed,
            "records_written": self.records_written,
            "secondary_unique": self.secondary_unique,
            "late_messages": self.late_messages,
            "elapsed": round(self.elapsed, 3),
        }


class CrawlOrchestrator:
    """Central coordinator for one crawl run."""

    def __init__(
        self,
        config: CrawlConfig,
        fetcher_factory: FetcherFactory | None = None,
        progress: ProgressReporter | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config
        self.fetcher_factory = fetcher_factory or self._default_fetcher
        self.progress = progress or ProgressReporter(enabled=config.progress, label=config.kind.value)
        self.logger = logger or structlog.get_logger("tmdb_crawler").bind(component="orchestrator")

    def run(self) -> CrawlSummary:
        started = time.monotonic()
        identifiers = load_identifiers(self.config.input_path)
        partitions = partition(identifiers, self.config.workers)
        summary = CrawlSummary(identifiers=len(identifiers), workers=self.config.workers)
        self.logger.info(
            "crawl_started",
            kind=self.config.kind.value,
            identifiers=len(identifiers),
            workers=self.config.workers,
        )

        channel = AggregationChannel()
        record_sink = self._create_record_sink()
        identifier_sink = self._create_identifier_sink()
        movie_filter = MovieFilter(self.config.thresholds)
        self.progress.start(total=len(identifiers))
        pool = WorkerPool(self.config.workers)
        try:
            for worker_id, ids in enumerate(partitions):
                worker = Worker(
                    worker_id=worker_id,
                    partition=ids,
                    fetcher=self.fetcher_factory(worker_id),
                    channel=channel,
                    kind=self.config.kind,
                    movie_filter=movie_filter,
                    progress=self.progress,
                    logger=worker_logger(worker_id),
                )
                pool.submit(worker.run)

            aggregator = Aggregator(
                channel,
                workers=self.config.workers,
                record_sink=record_sink,
                identifier_sink=identifier_sink,
            )
            try:
                aggregation = aggregator.run(producers_alive=pool.alive)
            except AggregationError:
                # Surface the worker failure that caused the missing completion
                pool.join()
                raise
            except Exception:
                # Remaining workers stop at their next send
                channel.close()
                raise
            worker_stats: list[WorkerStats] = pool.join()
        finally:
            self.progress.close()
            pool.shutdown()
            record_sink.close()
            if identifier_sink is not None:
                identifier_sink.close()

        for stats in worker_stats:
            summary.fetched += stats.fetched
            summary.accepted += stats.accepted
            summary.rejected += stats.rejected
            summary.failed += stats.failed
        summary.records_written = aggregation.records
        summary.secondary_unique = aggregation.secondary_unique
        summary.late_messages = aggregation.late_messages
        summary.elapsed = time.monotonic() - started
        self.logger.info("crawl_finished", **summary.as_dict())
        return summary

    # ------------------------------------------------------------------
    def _default_fetcher(self, worker_id: int) -> Fetcher:
        return Fetcher(self.config.api, self.config.kind)

    def _create_record_sink(self) -> BaseExporter:
        if self.config.output_format == "sqlite":
            return SQLiteExporter(self.config.output_path, table=f"{self.config.kind.value}s")
        return RecordFileExporter(self.config.output_path)

    def _create_identifier_sink(self) -> BaseExporter | None:
        if self.config.kind is not EntityKind.MOVIE or self.config.secondary_output_path is None:
            return None
        return IdentifierFileExporter(self.config.secondary_output_path)


__all__ = ["CrawlOrchestrator", "CrawlSummary"]
