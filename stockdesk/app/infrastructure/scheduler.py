from __future__ import annotations

import heapq
import itertools
import threading
import time
from typing import Callable, Protocol


class Cancelable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> Cancelable: ...

    def run_due(self, now: float | None = None) -> int: ...


class ScheduledCall:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class LoopScheduler:
    """Delayed callbacks dispatched by the owning UI loop.

    ``call_later`` only queues the callback with its due time and may be
    called from any thread. Callbacks run inside ``run_due``, on the thread
    that calls it, so the signals they write are only touched by the loop
    thread. The host calls ``run_due`` from its own tick, the same way a Tk
    app hands work back through ``root.after``.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self._queue: list[tuple[float, int, ScheduledCall]] = []
        self._order = itertools.count()
        self._lock = threading.Lock()

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(self.clock() + max(delay_seconds, 0.0), callback)
        with self._lock:
            heapq.heappush(self._queue, (call.due, next(self._order), call))
        return call

    def run_due(self, now: float | None = None) -> int:
        now = self.clock() if now is None else now
        ready: list[ScheduledCall] = []
        with self._lock:
            while self._queue and self._queue[0][0] <= now:
                ready.append(heapq.heappop(self._queue)[2])
        ran = 0
        for call in ready:
            if call.cancelled:
                continue
            call.callback()
            ran += 1
        return ran

    def next_delay(self) -> float | None:
        """Seconds until the earliest live callback is due, or None when idle."""
        with self._lock:
            live = [due for due, _, call in self._queue if not call.cancelled]
        if not live:
            return None
        return max(min(live) - self.clock(), 0.0)
