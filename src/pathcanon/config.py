"""Configuration loader: YAML file with environment variable fallbacks."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .canon import get_style

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class CanonConfig:
    style: str = "posix"  # "posix" or "efi"
    debug: bool = False  # render component tables for every canonicalization


@dataclass
class LoggingConfig:
    level: str = "WARNING"

    @property
    def numeric_level(self) -> int:
        return getattr(logging, self.level)


@dataclass
class AppConfig:
    canon: CanonConfig = field(default_factory=CanonConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    source: Path | None = None  # config file the values came from, if any


def _resolve_data_dir() -> Path:
    return Path.home() / ".pathcanon"


def _get_config_path(data_dir: Path | None = None) -> Path:
    if data_dir:
        return data_dir / "config.yaml"
    return _resolve_data_dir() / "config.yaml"


def _as_bool(value: Any) -> bool:
    return str(value).strip().lower() not in ("false", "0", "no", "")


def load_config(config_path: Path | None = None) -> AppConfig:
    raw: dict[str, Any] = {}
    path = config_path or _get_config_path()

    source: Path | None = None
    if path.exists():
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {path} must contain a mapping at the top level")
        source = path

    canon_raw = raw.get("canon", {}) or {}
    if not isinstance(canon_raw, dict):
        raise ValueError(f"'canon' in {path} must be a mapping")

    style_name = str(canon_raw.get("style") or os.environ.get("PATHCANON_STYLE", "posix")).strip().lower()
    try:
        get_style(style_name)
    except ValueError as e:
        raise ValueError(f"{e}. Set 'canon.style' in config.yaml ({path}) or PATHCANON_STYLE.") from None

    debug = _as_bool(canon_raw.get("debug", os.environ.get("PATHCANON_DEBUG", "false")))

    logging_raw = raw.get("logging", {}) or {}
    if not isinstance(logging_raw, dict):
        raise ValueError(f"'logging' in {path} must be a mapping")
    level = str(logging_raw.get("level") or os.environ.get("PATHCANON_LOG_LEVEL", "WARNING")).strip().upper()
    if level not in _LOG_LEVELS:
        raise ValueError(
            f"Unknown log level {level!r} (expected one of: {', '.join(_LOG_LEVELS)}). "
            f"Set 'logging.level' in config.yaml ({path}) or PATHCANON_LOG_LEVEL."
        )

    return AppConfig(
        canon=CanonConfig(style=style_name, debug=debug),
        logging=LoggingConfig(level=level),
        source=source,
    )
