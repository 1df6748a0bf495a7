from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, TypeVar

from dotenv import load_dotenv

ENV_PREFIX = "BIZOPS_"

N = TypeVar("N", int, float)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    retries: int = 2
    retry_backoff_seconds: float = 0.3
    max_connections: int = 10
    verify_ssl: bool = True
    default_page_size: int = 10
    search_debounce_ms: int = 300

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()


def _env(name: str) -> str | None:
    value = os.getenv(ENV_PREFIX + name)
    return value.strip() if value is not None else None


def _number(name: str, default: N, cast: Callable[[str], N], *, minimum: N, exclusive: bool = False) -> N:
    """Read ``BIZOPS_<name>`` as a number bounded below by ``minimum``."""
    raw = _env(name)
    key = ENV_PREFIX + name
    if raw is None or raw == "":
        value = default
    else:
        try:
            value = cast(raw)
        except ValueError as exc:
            kind = "an integer" if cast is int else "a number"
            raise ConfigError(f"Invalid {key}: expected {kind}, got {raw!r}") from exc
    if value < minimum or (exclusive and value == minimum):
        bound = f"> {minimum}" if exclusive else f">= {minimum}"
        raise ConfigError(f"Invalid {key}: expected {bound}, got {value}")
    return value


def _flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def load_config(env_file: str | None = None) -> ClientConfig:
    """Build a :class:`ClientConfig` from ``BIZOPS_*`` variables (and an optional .env file).

    ``BIZOPS_API_BASE_URL_<ENV>`` wins over ``BIZOPS_API_BASE_URL`` for the
    environment named by ``BIZOPS_ENV`` (default ``dev``).
    """
    load_dotenv(env_file)

    env_name = _env("ENV") or "dev"
    api_base_url = _env(f"API_BASE_URL_{env_name.upper()}") or _env("API_BASE_URL")
    if not api_base_url:
        raise ConfigError(f"Missing required config values: {ENV_PREFIX}API_BASE_URL")

    timeout = _number("TIMEOUT_SECONDS", 10.0, float, minimum=0.0, exclusive=True)
    connect_timeout = _number("CONNECT_TIMEOUT_SECONDS", min(timeout, 5.0), float, minimum=0.0, exclusive=True)
    read_timeout = _number("READ_TIMEOUT_SECONDS", max(timeout, connect_timeout), float, minimum=0.0, exclusive=True)

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        connect_timeout_seconds=connect_timeout,
        read_timeout_seconds=read_timeout,
        retries=_number("RETRIES", 2, int, minimum=0),
        retry_backoff_seconds=_number("RETRY_BACKOFF_SECONDS", 0.3, float, minimum=0.0),
        max_connections=_number("MAX_CONNECTIONS", 10, int, minimum=1),
        verify_ssl=_flag("VERIFY_SSL", True),
        default_page_size=_number("DEFAULT_PAGE_SIZE", 10, int, minimum=1),
        search_debounce_ms=_number("SEARCH_DEBOUNCE_MS", 300, int, minimum=0),
    )
