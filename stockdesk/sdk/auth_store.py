from __future__ import annotations

from dataclasses import dataclass, field

from .local_cache import AUTH_TOKEN_KEY, LocalCache


@dataclass
class AuthStore:
    """Bearer token holder, read from the durable cache on every call."""

    cache: LocalCache = field(default_factory=LocalCache)

    def set_token(self, token: str) -> None:
        self.cache.set(AUTH_TOKEN_KEY, token)

    def get_token(self) -> str | None:
        token = self.cache.get(AUTH_TOKEN_KEY)
        return token if isinstance(token, str) and token else None

    def clear(self) -> None:
        self.cache.remove(AUTH_TOKEN_KEY)
