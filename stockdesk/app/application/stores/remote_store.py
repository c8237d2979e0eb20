from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from stockdesk.app.application.reactive import Signal
from stockdesk.app.application.state.session_state import SessionState
from stockdesk.app.infrastructure.errors.error_mapper import ErrorMapper
from stockdesk.app.infrastructure.logging.logger import get_logger, log_action
from stockdesk.sdk.exceptions import ApiError

T = TypeVar("T")
R = TypeVar("R")

logger = get_logger("stockdesk.stores")


class RemoteStore(Generic[T]):
    """Client-side mirror of one remote collection.

    ``load`` never raises: failures land in ``error`` and empty the snapshot.
    Mutations are single attempts that re-fetch the whole collection on
    success and propagate the failure otherwise.
    """

    resource = "resource"
    load_fallback = "Failed to load data"

    def __init__(self, session: SessionState) -> None:
        self.session = session
        self.items: Signal[list[T]] = Signal([])
        self.loading: Signal[bool] = Signal(False)
        self.error: Signal[str | None] = Signal(None)
        self.last_params: Any = None

    def fetch(self, params: Any) -> list[T]:
        raise NotImplementedError

    @property
    def snapshot(self) -> list[T]:
        return list(self.items.value)

    def load(self, params: Any = None) -> list[T]:
        self.last_params = params
        self.loading.set(True)
        try:
            items = self.fetch(params)
        except (ApiError, ValueError) as error:
            self.error.set(ErrorMapper.to_message(error, self.load_fallback))
            self.loading.set(False)
            self.items.set([])
            payload = ErrorMapper.to_payload(error)
            log_action(logger, self.resource, "load", self.session.role, payload["trace_id"], "error", payload)
            return []
        self.items.set(list(items))
        self.error.set(None)
        self.loading.set(False)
        log_action(logger, self.resource, "load", self.session.role, None, "success", {"count": len(items)})
        return self.snapshot

    def refresh(self) -> list[T]:
        return self.load(self.last_params)

    def _mutate(self, action: str, call: Callable[[], R]) -> R:
        try:
            result = call()
        except ApiError as error:
            payload = ErrorMapper.to_payload(error)
            log_action(logger, self.resource, action, self.session.role, error.trace_id, "error", payload)
            raise
        log_action(logger, self.resource, action, self.session.role, None, "success")
        self.refresh()
        return result
