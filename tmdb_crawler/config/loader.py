"""Configuration loading helpers for tmdb-crawler."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from ..errors import StartupConfigurationError
from .models import CrawlConfig

CONFIG_EXTENSIONS = (".yaml", ".yml", ".json")
API_KEY_ENV = "TMDB_API_KEY"
HOME_ENV = "TMDB_CRAWLER_HOME"


def _read_file(path: Path) -> dict:
    text = path.read_text(encoding="utf-8")
    if path.suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return data


def _deep_merge(base: dict, overrides: Mapping[str, Any]) -> dict:
    merged = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, Mapping):
            current = merged.get(key)
            merged[key] = _deep_merge(current if isinstance(current, dict) else {}, value)
        else:
            merged[key] = value
    return merged


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "config"
        parts.append(f"{location}: {error.get('msg')}")
    return "; ".join(parts)


@dataclass(slots=True)
class ConfigLocator:
    """Resolve the runtime directories from the project root."""

    project_root: Path | None = None
    logs_dir: Path | None = None

    def __post_init__(self) -> None:
        env_root = os.environ.get(HOME_ENV)
        if env_root:
            root = Path(env_root).expanduser().resolve()
        else:
            root = (self.project_root or Path.cwd()).resolve()
        self.project_root = root
        self.logs_dir = (root / "logs").resolve()

    def ensure_directories(self) -> None:
        self.logs_dir.mkdir(parents=True, exist_ok=True)


class ConfigLoader:
    """Build a validated :class:`CrawlConfig` from file, environment and overrides."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self.environ = os.environ if environ is None else environ

    def load(self, config_file: Path | None = None, **overrides: Any) -> CrawlConfig:
        payload: dict[str, Any] = {}
        if config_file is not None:
            if config_file.suffix not in CONFIG_EXTENSIONS:
                raise StartupConfigurationError(
                    f"Unsupported config file type {config_file.suffix!r}; expected one of {CONFIG_EXTENSIONS}"
                )
            if not config_file.exists():
                raise StartupConfigurationError(f"Config file not found: {config_file}")
            try:
                payload = _read_file(config_file)
            except (ValueError, yaml.YAMLError) as exc:
                raise StartupConfigurationError(f"Unreadable config file {config_file}: {exc}") from exc

        payload = _deep_merge(payload, overrides)
        api = dict(payload.get("api") or {})
        if not api.get("api_key") and self.environ.get(API_KEY_ENV):
            api["api_key"] = self.environ[API_KEY_ENV]
        payload["api"] = api

        try:
            return CrawlConfig.model_validate(payload)
        except ValidationError as exc:
            raise StartupConfigurationError(_format_validation_error(exc)) from exc


__all__ = ["API_KEY_ENV", "CONFIG_EXTENSIONS", "ConfigLoader", "ConfigLocator", "HOME_ENV"]
