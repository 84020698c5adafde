"""Acceptance predicate for decoded movie records."""

from __future__ import annotations

from ..config import FilterThresholds
from .parser import Movie


class MovieFilter:
    """Pure predicate; holds only its thresholds and never mutates a record."""

    def __init__(self, thresholds: FilterThresholds | None = None) -> None:
        self.thresholds = thresholds or FilterThresholds()

    def accepts(self, movie: Movie) -> bool:
        t = self.thresholds
        if not (
            movie.budget > t.min_budget
            and movie.revenue >= t.min_revenue
            and movie.genres
            and movie.credits.cast
            and movie.credits.crew
        ):
            return False
        if t.require_related:
            return movie.similar.total_results > 0 and movie.recommendations.total_results > 0
        return True

    __call__ = accepts


__all__ = ["MovieFilter"]
