"""Decoding of remote JSON payloads into typed records."""

from __future__ import annotations

from pydantic import BaseModel, Field, ValidationError

from ..errors import DecodeError


class IdRef(BaseModel):
    """Nested entity reference; only the id is kept."""

    id: int


class Credits(BaseModel):
    cast: list[IdRef]
    crew: list[IdRef]


class ConnectedMovies(BaseModel):
    total_results: int = 0


class Movie(BaseModel):
    """Fields of a movie payload needed to decide acceptance.

    ``similar`` and ``recommendations`` default to empty so a payload fetched
    without those appendices still decodes; the filter decides whether that
    matters.
    """

    id: int | None = None
    budget: int
    revenue: int
    genres: list[IdRef]
    credits: Credits
    similar: ConnectedMovies = Field(default_factory=ConnectedMovies)
    recommendations: ConnectedMovies = Field(default_factory=ConnectedMovies)

    model_config = {"frozen": True}

    @property
    def cast_ids(self) -> list[int]:
        return [member.id for member in self.credits.cast]


class RecordParser:
    """Turn raw response text into records."""

    def parse_movie(self, text: str) -> Movie:
        try:
            return Movie.model_validate_json(text)
        except ValidationError as exc:
            raise DecodeError(f"payload does not match movie shape: {exc.error_count()} error(s)") from exc


__all__ = ["ConnectedMovies", "Credits", "IdRef", "Movie", "RecordParser"]
