from __future__ import annotations

from dataclasses import dataclass

from ..auth_store import AuthStore
from ..http_client import HttpClient


@dataclass
class BaseClient:
    http: HttpClient
    auth_store: AuthStore | None = None

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        token = self.auth_store.get_token() if self.auth_store else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _request(self, method: str, path: str, **kwargs):
        headers = kwargs.pop("headers", {})
        merged = {**self._auth_headers(), **headers}
        return self.http.request(method, path, headers=merged, **kwargs)


def range_params(start_date: str | None, end_date: str | None) -> dict[str, str] | None:
    params = {key: value for key, value in (("startDate", start_date), ("endDate", end_date)) if value}
    return params or None
