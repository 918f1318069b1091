"""Frozen dataclasses for configuration and YAML loader with env-var interpolation."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from . import __version__
from .exceptions import ConfigError

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")

DEFAULT_DNS_NAME = "all.api.radio-browser.info"
DEFAULT_FALLBACK_URL = "https://de1.api.radio-browser.info/"
DEFAULT_USER_AGENT = f"radiobrowser-discovery/{__version__}"
DEFAULT_TIMEOUT_SECONDS = 5.0
DEFAULT_MAX_WORKERS = 10


def _interpolate_env(value: str) -> str:
    """Replace ${ENV_VAR} placeholders with environment variable values."""

    def _replace(match: re.Match) -> str:
        env_key = match.group(1)
        env_val = os.environ.get(env_key)
        if env_val is None:
            raise ConfigError(f"Environment variable '{env_key}' is not set")
        return env_val

    return _ENV_PATTERN.sub(_replace, value)


def _walk_and_interpolate(obj: Any) -> Any:
    """Recursively interpolate env vars in strings throughout a nested structure."""
    if isinstance(obj, str):
        return _interpolate_env(obj)
    if isinstance(obj, dict):
        return {k: _walk_and_interpolate(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_walk_and_interpolate(v) for v in obj]
    return obj


@dataclass(frozen=True)
class ProbeConfig:
    """Settings shared read-only by every probe of one discovery run.

    ``timeout`` bounds the total wait for one probe's result, measured from
    the moment a worker starts it. ``request_timeout`` is handed to the HTTP
    client as its own connect/read timeout. Both are in seconds.
    """

    user_agent: str = DEFAULT_USER_AGENT
    proxy_uri: str | None = None
    proxy_user: str | None = None
    proxy_password: str | None = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    request_timeout: float = DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class PoolConfig:
    max_workers: int = DEFAULT_MAX_WORKERS


@dataclass(frozen=True)
class DiscoveryConfig:
    dns_name: str = DEFAULT_DNS_NAME
    fallback_url: str = DEFAULT_FALLBACK_URL


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    format: str = "text"  # "json" or "text"


@dataclass(frozen=True)
class AppConfig:
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    probe: ProbeConfig = field(default_factory=ProbeConfig)
    pool: PoolConfig = field(default_factory=PoolConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _build_nested(cls: type, data: dict[str, Any]) -> Any:
    """Construct a frozen dataclass, recursively building nested dataclass fields."""
    if not isinstance(data, dict):
        return data
    field_types = {f.name: f.type for f in cls.__dataclass_fields__.values()}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key not in field_types:
            continue
        ft = field_types[key]
        # Resolve string annotations to actual types in the module scope
        if isinstance(ft, str):
            ft = eval(ft, globals(), {cls.__name__: cls})  # noqa: S307
        if isinstance(ft, type) and hasattr(ft, "__dataclass_fields__") and isinstance(value, dict):
            kwargs[key] = _build_nested(ft, value)
        else:
            kwargs[key] = value
    return cls(**kwargs)


def load_config(path: str | Path) -> AppConfig:
    """Load and validate configuration from a YAML file."""
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Configuration file not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f)

    # An empty file means "all defaults"
    if raw is None:
        raw = {}

    if not isinstance(raw, dict):
        raise ConfigError("Configuration file must be a YAML mapping")

    raw = _walk_and_interpolate(raw)
    config = _build_nested(AppConfig, raw)
    validate(config)
    return config


def validate(config: AppConfig) -> None:
    """Validate configuration values."""
    if not config.discovery.dns_name:
        raise ConfigError("discovery.dns_name is required")

    if not config.probe.user_agent:
        raise ConfigError("probe.user_agent is required")

    for name in ("timeout", "request_timeout"):
        value = getattr(config.probe, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ConfigError(f"probe.{name} must be a positive number of seconds")

    if (config.probe.proxy_user or config.probe.proxy_password) and not config.probe.proxy_uri:
        raise ConfigError("probe.proxy_user/proxy_password require probe.proxy_uri")

    if not isinstance(config.pool.max_workers, int) or config.pool.max_workers < 1:
        raise ConfigError("pool.max_workers must be >= 1")

    if config.logging.format not in ("json", "text"):
        raise ConfigError("logging.format must be 'json' or 'text'")
