from __future__ import annotations

import json
import warnings

import pytest
from typer.testing import CliRunner

from tmdb_crawler import app as app_module
from tmdb_crawler.app import CONFIG_ERROR_EXIT, app
from tmdb_crawler.orchestrator import CrawlSummary


class StubOrchestrator:
    instances: list["StubOrchestrator"] = []

    def __init__(self, config) -> None:
        self.config = config
        StubOrchestrator.instances.append(self)

    def run(self) -> CrawlSummary:
        return CrawlSummary(identifiers=4, workers=self.config.workers, fetched=3, accepted=2, rejected=1, failed=1)


@pytest.fixture
def stub_orchestrator(monkeypatch):
    StubOrchestrator.instances = []
    monkeypatch.setattr(app_module, "CrawlOrchestrator", StubOrchestrator)
    return StubOrchestrator


def test_crawl_builds_config_from_options(tmp_path, write_ids, stub_orchestrator) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "crawl",
            str(write_ids([1, 2, 3, 4])),
            str(tmp_path / "movies.json"),
            "--people-output",
            str(tmp_path / "people.json"),
            "--workers",
            "3",
            "--api-key",
            "k",
        ],
    )
    assert result.exit_code == 0, result.output
    config = stub_orchestrator.instances[0].config
    assert config.workers == 3
    assert config.api.api_key == "k"
    assert config.progress is False
    assert "Accepted" in result.output


def test_crawl_quiet_prints_one_line(tmp_path, write_ids, stub_orchestrator) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["crawl", str(write_ids([1])), str(tmp_path / "people.json"), "--kind", "person", "--api-key", "k", "--quiet"],
    )
    assert result.exit_code == 0, result.output
    assert "accepted 2" in result.output


def test_boolean_flags_parse_without_deprecation(tmp_path, write_ids, stub_orchestrator) -> None:
    runner = CliRunner()
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        result = runner.invoke(
            app,
            ["--verbose", "crawl", str(write_ids([1])), str(tmp_path / "people.json"), "--kind", "person", "--api-key", "k", "--quiet"],
        )
    assert result.exit_code == 0, result.output
    assert not [w for w in caught if "is_flag" in str(w.message)]


def test_missing_api_key_exits_with_config_status(tmp_path, write_ids, stub_orchestrator) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["crawl", str(write_ids([1])), str(tmp_path / "out.json"), "--kind", "person"],
    )
    assert result.exit_code == CONFIG_ERROR_EXIT
    assert stub_orchestrator.instances == []


def test_crawl_end_to_end_with_mock_transport(tmp_path, write_ids, movie_payload, monkeypatch) -> None:
    import httpx

    from tmdb_crawler.engine import fetcher as fetcher_module

    payload = movie_payload(id=11)

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/movie/11"):
            return httpx.Response(200, text=payload)
        return httpx.Response(404, json={"status_code": 34})

    real_client = httpx.Client
    monkeypatch.setattr(
        fetcher_module.httpx,
        "Client",
        lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
    )
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "crawl",
            str(write_ids([10, 11, 12])),
            str(tmp_path / "movies.json"),
            "-p",
            str(tmp_path / "people.json"),
            "-w",
            "2",
            "--api-key",
            "k",
            "--quiet",
        ],
    )
    assert result.exit_code == 0, result.output
    assert (tmp_path / "movies.json").read_text(encoding="utf-8") == payload + "\n"
    people = [json.loads(line)["id"] for line in (tmp_path / "people.json").read_text(encoding="utf-8").splitlines()]
    assert sorted(people) == [2975, 6384]


def test_split_command(tmp_path) -> None:
    source = tmp_path / "ids.json"
    source.write_text("a\nb\nc\nd\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(app, ["split", str(source), str(tmp_path / "part.json"), "2", "1"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "part.json").read_text(encoding="utf-8") == "b\nd\n"


def test_split_rejects_bad_machine_id(tmp_path) -> None:
    source = tmp_path / "ids.json"
    source.write_text("a\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(app, ["split", str(source), str(tmp_path / "part.json"), "2", "2"])
    assert result.exit_code == CONFIG_ERROR_EXIT
