from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import urlparse

from dotenv import load_dotenv

API_URL_VAR = "STOCKDESK_API_URL"
TIMEOUT_VAR = "STOCKDESK_TIMEOUT_SECONDS"
VERIFY_SSL_VAR = "STOCKDESK_VERIFY_SSL"

CONNECT_TIMEOUT_CAP = 5.0

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    api_base_url: str
    timeout_seconds: float = 10.0
    verify_ssl: bool = True

    @property
    def timeout(self) -> tuple[float, float]:
        """(connect, read) pair for requests. Connecting waits at most 5 s."""
        return min(self.timeout_seconds, CONNECT_TIMEOUT_CAP), self.timeout_seconds


def env_text(name: str) -> str:
    return (os.getenv(name) or "").strip()


def read_float(name: str, default: float) -> float:
    raw = env_text(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


def read_int(name: str, default: int) -> int:
    raw = env_text(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def read_bool(name: str, default: bool) -> bool:
    raw = env_text(name).lower()
    if not raw:
        return default
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ConfigError(f"{name} must be true or false, got {raw!r}")


def validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def load_config(env_file: str | None = None) -> ClientConfig:
    """Build the SDK config from the environment.

    Variables from ``env_file`` (or a ``.env`` found from the working
    directory) only fill in what the environment leaves unset.
    """
    load_dotenv(env_file)
    api_url = env_text(API_URL_VAR).rstrip("/")
    validate(bool(api_url), f"{API_URL_VAR} is required")
    parsed = urlparse(api_url)
    validate(
        parsed.scheme in {"http", "https"} and bool(parsed.netloc),
        f"{API_URL_VAR} must be an http(s) URL, got {api_url!r}",
    )
    timeout_seconds = read_float(TIMEOUT_VAR, 10.0)
    validate(timeout_seconds > 0, f"{TIMEOUT_VAR} must be > 0, got {timeout_seconds}")
    return ClientConfig(
        api_base_url=api_url,
        timeout_seconds=timeout_seconds,
        verify_ssl=read_bool(VERIFY_SSL_VAR, True),
    )
