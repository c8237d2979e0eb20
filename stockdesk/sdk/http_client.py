from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

import requests

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import TransportError
from .tracing import TRACE_HEADER, TraceContext


@dataclass
class HttpClient:
    """Single-attempt JSON transport. Failed calls are never retried."""

    config: ClientConfig
    trace: TraceContext | None = None
    session: requests.Session | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
        if self.trace is None:
            self.trace = TraceContext()

    def _build_url(self, path: str) -> str:
        return urljoin(self.config.api_base_url.rstrip("/") + "/", path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
    ) -> dict[str, Any] | list[Any] | None:
        request_headers = {"Accept": "application/json", **(headers or {})}
        request_headers[TRACE_HEADER] = self.trace.begin()
        try:
            response = self.session.request(
                method=method.upper(),
                url=self._build_url(path),
                headers=request_headers,
                json=json_body,
                params=params,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.RequestException as exc:
            raise TransportError(
                code="TRANSPORT_ERROR",
                message=str(exc),
                details={"type": type(exc).__name__, "operation": f"{module}.{operation}"},
                trace_id=self.trace.trace_id,
                status_code=0,
            ) from exc

        if response.ok:
            self.trace.adopt(response.headers)
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError:
                return None

        payload = _error_body(response)
        trace_id = self.trace.adopt(response.headers, payload)
        raise map_error(response.status_code, payload, trace_id)


def _error_body(response: requests.Response) -> dict[str, Any]:
    # Only a JSON object can carry a server message; anything else is kept as details.
    try:
        body = response.json()
    except ValueError:
        return {"details": response.text} if response.text else {}
    return body if isinstance(body, dict) else {"details": body}
