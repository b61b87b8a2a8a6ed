"""Application configuration loaded from a YAML file."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_PATH = Path("config") / "config.yml"


@dataclass
class ListenConfig:
    """Where the HTTP server listens."""

    type: str = ""
    bind_ip: str = ""
    port: str = ""


@dataclass
class Config:
    """Top-level application settings."""

    is_debug: bool | None = None
    listen: ListenConfig = field(default_factory=ListenConfig)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def load_config(path: str | Path) -> Config:
    """Read a configuration file; raise on a missing or malformed file."""
    with open(path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"configuration in {path} must be a mapping")

    listen = data.get("listen") or {}
    if not isinstance(listen, dict):
        raise ValueError("'listen' must be a mapping")

    is_debug = data.get("is_debug")
    if is_debug is not None and not isinstance(is_debug, bool):
        raise ValueError("'is_debug' must be a boolean")

    return Config(
        is_debug=is_debug,
        listen=ListenConfig(
            type=_text(listen.get("type")),
            bind_ip=_text(listen.get("bind_ip")),
            port=_text(listen.get("port")),
        ),
    )


@functools.lru_cache(maxsize=None)
def get_config() -> Config:
    """Load the default configuration once and return the shared instance."""
    return load_config(DEFAULT_CONFIG_PATH)