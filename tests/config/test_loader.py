from __future__ import annotations

import json

import pytest
import yaml

from tmdb_crawler.config import ConfigLoader, ConfigLocator, EntityKind
from tmdb_crawler.errors import StartupConfigurationError


def test_yaml_file_merged_with_overrides(tmp_path, write_ids) -> None:
    ids = write_ids([1, 2])
    config_file = tmp_path / "run.yaml"
    config_file.write_text(
        yaml.safe_dump(
            {
                "kind": "person",
                "workers": 4,
                "input_path": str(ids),
                "output_path": str(tmp_path / "people.json"),
                "api": {"api_key": "from-file", "language": "fr-FR"},
                "thresholds": {"min_revenue": 5},
            }
        ),
        encoding="utf-8",
    )
    config = ConfigLoader(environ={}).load(config_file, workers=16, api={"api_key": None})
    assert config.kind is EntityKind.PERSON
    assert config.workers == 16
    assert config.api.api_key == "from-file"
    assert config.api.language == "fr-FR"
    assert config.thresholds.min_revenue == 5


def test_api_key_falls_back_to_environment(tmp_path, write_ids) -> None:
    loader = ConfigLoader(environ={"TMDB_API_KEY": "env-key"})
    config = loader.load(
        None,
        kind="person",
        input_path=write_ids([1]),
        output_path=tmp_path / "out.json",
    )
    assert config.api.api_key == "env-key"


def test_json_config_file(tmp_path, write_ids) -> None:
    config_file = tmp_path / "run.json"
    config_file.write_text(
        json.dumps(
            {
                "input_path": str(write_ids([3])),
                "output_path": str(tmp_path / "movies.json"),
                "secondary_output_path": str(tmp_path / "people.json"),
                "api": {"api_key": "k"},
            }
        ),
        encoding="utf-8",
    )
    config = ConfigLoader(environ={}).load(config_file)
    assert config.kind is EntityKind.MOVIE


def test_validation_errors_become_startup_errors(tmp_path, write_ids) -> None:
    with pytest.raises(StartupConfigurationError) as excinfo:
        ConfigLoader(environ={}).load(
            None,
            input_path=write_ids([1]),
            output_path=tmp_path / "out.json",
            secondary_output_path=tmp_path / "people.json",
            workers=0,
        )
    message = str(excinfo.value)
    assert "workers" in message


@pytest.mark.parametrize("name, content", [("run.toml", "x = 1"), ("run.yaml", "- a\n- b\n")])
def test_unusable_config_files(tmp_path, name, content) -> None:
    config_file = tmp_path / name
    config_file.write_text(content, encoding="utf-8")
    with pytest.raises(StartupConfigurationError):
        ConfigLoader(environ={}).load(config_file)


def test_missing_config_file(tmp_path) -> None:
    with pytest.raises(StartupConfigurationError):
        ConfigLoader(environ={}).load(tmp_path / "nope.yaml")


def test_locator_honours_home_env(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("TMDB_CRAWLER_HOME", str(tmp_path / "elsewhere"))
    locator = ConfigLocator()
    locator.ensure_directories()
    assert locator.logs_dir == (tmp_path / "elsewhere" / "logs").resolve()
    assert locator.logs_dir.is_dir()
