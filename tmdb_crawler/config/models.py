"""Pydantic models describing a single crawl run."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator


class EntityKind(str, Enum):
    """Remote entity kind fetched by a run."""

    MOVIE = "movie"
    PERSON = "person"


class FilterThresholds(BaseModel):
    """Acceptance thresholds applied to decoded movie records."""

    min_budget: int = Field(default=1000, ge=0, description="Budget must be strictly above this.")
    min_revenue: int = Field(default=100_000_000, ge=0, description="Revenue must be at least this.")
    require_related: bool = Field(
        default=True,
        description="Also require non-zero similar and recommended movie counts.",
    )


class ApiConfig(BaseModel):
    """Remote endpoint settings."""

    api_key: str = ""
    base_url: str = "https://api.themoviedb.org/3"
    language: str = "en-US"
    timeout: float = 20.0

    @field_validator("base_url")
    @classmethod
    def _strip_slash(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        return value.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be > 0")
        return value


class CrawlConfig(BaseModel):
    """Full definition of one crawl run; immutable once the run starts."""

    kind: EntityKind = EntityKind.MOVIE
    workers: int = Field(default=8, description="Number of parallel workers.")
    input_path: Path
    output_path: Path
    secondary_output_path: Path | None = None
    output_format: Literal["jsonl", "sqlite"] = "jsonl"
    api: ApiConfig = Field(default_factory=ApiConfig)
    thresholds: FilterThresholds = Field(default_factory=FilterThresholds)
    progress: bool = True

    model_config = {"frozen": True}

    @field_validator("input_path", "output_path", "secondary_output_path", mode="before")
    @classmethod
    def _coerce_path(cls, value: Any) -> Path | None:
        if value in (None, ""):
            return None
        return Path(value)

    @field_validator("workers")
    @classmethod
    def _validate_workers(cls, value: int) -> int:
        if value < 1:
            raise ValueError("workers must be >= 1")
        return value

    @model_validator(mode="after")
    def _validate_run(self) -> "CrawlConfig":
        if not self.api.api_key:
            raise ValueError("an API key is required (option, config file or TMDB_API_KEY)")
        if self.kind is EntityKind.MOVIE and self.secondary_output_path is None:
            raise ValueError("movie crawls require secondary_output_path for discovered person ids")
        if not self.input_path.exists():
            raise ValueError(f"input file not found: {self.input_path}")
        outputs = [self.output_path]
        if self.secondary_output_path is not None:
            outputs.append(self.secondary_output_path)
        resolved = [path.resolve() for path in outputs]
        if len(set(resolved)) != len(resolved):
            raise ValueError("output_path and secondary_output_path must be different files")
        if self.input_path.resolve() in resolved:
            raise ValueError("output files must not overwrite the input file")
        return self


__all__ = ["ApiConfig", "CrawlConfig", "EntityKind", "FilterThresholds"]
