"""Pytest configuration providing shared fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

import pytest

from tmdb_crawler.config import ApiConfig, CrawlConfig, EntityKind, FilterThresholds
from tmdb_crawler.engine.fetcher import FetchResponse
from tmdb_crawler.errors import FetchError


class FakeFetcher:
    """Stand-in fetcher serving canned payloads keyed by identifier.

    Values may be a payload string, an exception instance to raise, or missing
    (treated as a 404).
    """

    def __init__(self, payloads: Mapping[int, Any]) -> None:
        self.payloads = dict(payloads)
        self.calls: list[int] = []
        self.closed = False

    def fetch(self, identifier: int) -> FetchResponse:
        self.calls.append(identifier)
        value = self.payloads.get(identifier)
        if value is None:
            raise FetchError(identifier, "unexpected status 404", status_code=404)
        if isinstance(value, Exception):
            raise value
        return FetchResponse(
            identifier=identifier,
            url=f"https://api.example.test/movie/{identifier}",
            status_code=200,
            text=value,
        )

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("TMDB_CRAWLER_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("TMDB_API_KEY", raising=False)
    return tmp_path / "home"


@pytest.fixture
def movie_payload() -> Callable[..., str]:
    def _builder(**overrides: Any) -> str:
        base: dict[str, Any] = {
            "id": 603,
            "title": "The Matrix",
            "budget": 63_000_000,
            "revenue": 463_517_383,
            "genres": [{"id": 28, "name": "Action"}],
            "credits": {
                "cast": [{"id": 6384, "name": "Keanu Reeves"}, {"id": 2975, "name": "Laurence Fishburne"}],
                "crew": [{"id": 9339, "job": "Director"}],
            },
            "similar": {"page": 1, "total_results": 20},
            "recommendations": {"page": 1, "total_results": 40},
        }
        base.update(overrides)
        return json.dumps(base)

    return _builder


@pytest.fixture
def write_ids(tmp_path: Path) -> Callable[[Iterable[int]], Path]:
    def _writer(ids: Iterable[int], name: str = "ids.json") -> Path:
        path = tmp_path / name
        path.write_text("".join(json.dumps({"id": i}) + "\n" for i in ids), encoding="utf-8")
        return path

    return _writer


@pytest.fixture
def crawl_config(tmp_path: Path, write_ids) -> Callable[..., CrawlConfig]:
    def _builder(ids: Iterable[int] = (1, 2, 3, 4), **overrides: Any) -> CrawlConfig:
        base: dict[str, Any] = {
            "kind": EntityKind.MOVIE,
            "workers": 2,
            "input_path": write_ids(ids),
            "output_path": tmp_path / "out" / "movies.json",
            "secondary_output_path": tmp_path / "out" / "people_ids.json",
            "api": ApiConfig(api_key="test-key", base_url="https://api.example.test/3"),
            "thresholds": FilterThresholds(),
            "progress": False,
        }
        base.update(overrides)
        return CrawlConfig(**base)

    return _builder


@pytest.fixture
def fake_fetcher() -> type[FakeFetcher]:
    return FakeFetcher
