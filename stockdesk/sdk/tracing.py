from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Mapping

TRACE_HEADER = "X-Trace-ID"


@dataclass
class TraceContext:
    """Correlation id of the request in flight.

    Every request starts with a fresh id. When the server answers with its
    own id, in a response header or an error body, that one is kept so a
    failure can be matched to the server's logs.
    """

    trace_id: str | None = None

    def begin(self) -> str:
        self.trace_id = uuid.uuid4().hex
        return self.trace_id

    def adopt(self, headers: Mapping[str, str], payload: Mapping[str, object] | None = None) -> str | None:
        # The error body wins over the header; requests headers match case-insensitively.
        candidate = payload.get("trace_id") if payload else None
        if not isinstance(candidate, str) or not candidate:
            candidate = headers.get(TRACE_HEADER)
        if candidate:
            self.trace_id = candidate
        return self.trace_id
