from __future__ import annotations

import asyncio
import heapq
import itertools
from concurrent.futures import Executor
from typing import Any, Callable, Optional

DoneCallback = Callable[[Any, Optional[BaseException]], None]


class _Repeating:
    """Re-arms a one-shot timer after every tick until cancelled."""

    def __init__(self, timers, period_sec: float, callback: Callable[[], None]) -> None:
        self._timers = timers
        self._period_sec = period_sec
        self._callback = callback
        self._handle = None
        self.cancelled = False

    def arm(self) -> "_Repeating":
        self._handle = self._timers.call_later(self._period_sec, self._tick)
        return self

    def _tick(self) -> None:
        if self.cancelled:
            return
        # re-arm first so a failing callback does not stop the cadence
        self.arm()
        self._callback()

    def cancel(self) -> None:
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()


class AsyncioTimers:
    """Timer and executor primitives bound to one asyncio event loop.

    All callbacks, including completions of `submit`, run on the loop thread.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        executor: Executor | None = None,
    ) -> None:
        self._loop = loop
        self._executor = executor

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay_sec: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(max(delay_sec, 0.0), callback)

    def call_every(self, period_sec: float, callback: Callable[[], None]) -> _Repeating:
        return _Repeating(self, period_sec, callback).arm()

    def submit(self, fn: Callable[[], Any], on_done: DoneCallback) -> asyncio.Future:
        future = self.loop.run_in_executor(self._executor, fn)

        def _deliver(fut: asyncio.Future) -> None:
            if fut.cancelled():
                return
            exc = fut.exception()
            if exc is not None:
                on_done(None, exc)
                return
            on_done(fut.result(), None)

        future.add_done_callback(_deliver)
        return future


class _ManualHandle:
    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTimers:
    """Virtual-clock timers for deterministic driving of the widget loops.

    `advance` fires due callbacks in due-time order. Submissions run inline
    unless `hold_submissions` is set, in which case they wait for
    `complete_submissions`.
    """

    def __init__(self, *, hold_submissions: bool = False) -> None:
        self.now = 0.0
        self.hold_submissions = hold_submissions
        self._queue: list[tuple[float, int, _ManualHandle, Callable[[], None]]] = []
        self._seq = itertools.count()
        self._held: list[tuple[Callable[[], Any], DoneCallback]] = []
        self.submitted = 0

    def call_later(self, delay_sec: float, callback: Callable[[], None]) -> _ManualHandle:
        handle = _ManualHandle()
        due = self.now + max(delay_sec, 0.0)
        heapq.heappush(self._queue, (due, next(self._seq), handle, callback))
        return handle

    def call_every(self, period_sec: float, callback: Callable[[], None]) -> _Repeating:
        return _Repeating(self, period_sec, callback).arm()

    def submit(self, fn: Callable[[], Any], on_done: DoneCallback) -> None:
        self.submitted += 1
        if self.hold_submissions:
            self._held.append((fn, on_done))
            return
        self._run(fn, on_done)

    @staticmethod
    def _run(fn: Callable[[], Any], on_done: DoneCallback) -> None:
        try:
            result = fn()
        except Exception as exc:
            on_done(None, exc)
            return
        on_done(result, None)

    def complete_submissions(self) -> int:
        held, self._held = self._held, []
        for fn, on_done in held:
            self._run(fn, on_done)
        return len(held)

    @property
    def held_count(self) -> int:
        return len(self._held)

    def pending_delays(self) -> list[float]:
        return sorted(due - self.now for due, _, handle, _ in self._queue if not handle.cancelled)

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, handle, callback = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = due
            callback()
        self.now = target
