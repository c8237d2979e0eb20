from __future__ import annotations

from stockdesk.app.application.reactive import Signal
from stockdesk.app.infrastructure.scheduler import Cancelable, LoopScheduler, Scheduler


class FlashMessages:
    """Success/error message pair for one page.

    Success messages clear themselves after ``success_seconds``; errors stay
    until the next action unless flashed explicitly. A pending clear is
    forgotten once it has run or been cancelled, and every outstanding one
    is cancelled on ``dispose``.
    """

    def __init__(self, scheduler: Scheduler | None = None, success_seconds: float = 2.0) -> None:
        self.scheduler = scheduler or LoopScheduler()
        self.success_seconds = success_seconds
        self.success: Signal[str] = Signal("")
        self.error: Signal[str] = Signal("")
        self._pending: list[Cancelable] = []
        self._disposed = False

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def clear(self) -> None:
        self.success.set("")
        self.error.set("")

    def show_error(self, message: str) -> None:
        self.success.set("")
        self.error.set(message)

    def flash_success(self, message: str, on_clear=None) -> Cancelable | None:
        self.error.set("")
        self.success.set(message)

        def expire() -> None:
            if self._disposed:
                return
            self.success.set("")
            if on_clear is not None:
                on_clear()

        return self.later(self.success_seconds, expire)

    def flash_error(self, message: str, seconds: float) -> Cancelable | None:
        self.error.set(message)
        return self.later(seconds, lambda: None if self._disposed else self.error.set(""))

    def later(self, seconds: float, callback) -> Cancelable | None:
        if self._disposed:
            return None
        handle: Cancelable | None = None

        def run() -> None:
            self._release(handle)
            callback()

        handle = self.scheduler.call_later(seconds, run)
        self._pending.append(handle)
        return handle

    def cancel(self, handle: Cancelable | None) -> None:
        if handle is None:
            return
        handle.cancel()
        self._release(handle)

    def dispose(self) -> None:
        self._disposed = True
        for handle in self._pending:
            handle.cancel()
        self._pending.clear()

    def _release(self, handle: Cancelable | None) -> None:
        if handle in self._pending:
            self._pending.remove(handle)
