"""Logging configuration built around structlog JSON logging."""

from __future__ import annotations

import logging.config
from pathlib import Path

import structlog

from .config import ConfigLocator

_LOGGING_INITIALISED = False


def _default_log_dir() -> Path:
    locator = ConfigLocator()
    locator.ensure_directories()
    return locator.logs_dir


def configure_logging(verbose: bool = False, log_dir: Path | None = None) -> structlog.BoundLogger:
    """Configure structlog + stdlib handlers and return application logger."""

    global _LOGGING_INITIALISED

    if not _LOGGING_INITIALISED:
        log_dir = log_dir or _default_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        error_log = log_dir / "error.log"
        crawler_log = log_dir / "crawler.log"
        level = "DEBUG" if verbose else "INFO"
        logging.config.dictConfig(
            {
                "version": 1,
                "disable_existing_loggers": False,
                "formatters": {
                    "plain": {
                        "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                        "fmt": "%(asctime)s %(levelname)s %(name)s %(threadName)s %(message)s",
                    }
                },
                "handlers": {
                    "console": {
                        "class": "logging.StreamHandler",
                        # Console stays quiet enough not to fight the progress bar
                        "level": "DEBUG" if verbose else "WARNING",
                        "formatter": "plain",
                    },
                    "crawler_file": {
                        "class": "logging.FileHandler",
                        "level": level,
                        "filename": str(crawler_log),
                        "formatter": "plain",
                        "encoding": "utf-8",
                    },
                    "error_file": {
                        "class": "logging.FileHandler",
                        "level": "ERROR",
                        "filename": str(error_log),
                        "formatter": "plain",
                        "encoding": "utf-8",
                    },
                },
                "loggers": {
                    "tmdb_crawler": {
                        "handlers": ["console", "crawler_file", "error_file"],
                        "level": level,
                        "propagate": False,
                    },
                },
            }
        )

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _LOGGING_INITIALISED = True
    return structlog.get_logger("tmdb_crawler")


def worker_logger(worker_id: int) -> structlog.BoundLogger:
    """Return a logger bound to one worker's partition."""

    return structlog.get_logger(f"tmdb_crawler.worker.{worker_id}").bind(worker=worker_id)


__all__ = ["configure_logging", "worker_logger"]
