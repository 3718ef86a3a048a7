from __future__ import annotations

import time
from typing import Any, Callable

from pydantic import BaseModel

from display_stocks.errors import AuthorizationError, TransientFetchError
from display_stocks.integrations.iex_rest import BatchQuoteResponse, parse_batch
from display_stocks.schemas.quote import QuoteSnapshot
from display_stocks.services.notifications import QUOTES_NOTIFICATION, NotificationChannel


class SchedulerState(BaseModel):
    loaded: bool = False
    retrying: bool = True
    has_data: bool = False
    in_flight: bool = False
    fetch_count: int = 0
    success_count: int = 0
    error_count: int = 0
    last_status: int | None = None
    last_error: str | None = None
    next_delay_sec: float | None = None


class FetchScheduler:
    """Fetches one batch of quotes per cycle and schedules the next cycle.

    Classification of a completed request:

    * 200: the snapshot is replaced and published; the renderer is pushed only
      on the first successful load.
    * 401: one forced render, then no further fetch for the process lifetime.
    * anything else (other statuses, bad bodies, transport errors): logged,
      snapshot kept, loop continues.

    The next fetch runs after `retry_delay_sec` when the completed cycle was the
    first one, otherwise after `update_interval_sec`. Only one request is ever
    in flight.
    """

    def __init__(
        self,
        *,
        client,
        symbols: list[str],
        timers,
        render_now: Callable[[], Any] | None = None,
        notifications: NotificationChannel | None = None,
        update_interval_sec: float = 180.0,
        retry_delay_sec: float = 5.0,
        notification_name: str = QUOTES_NOTIFICATION,
    ) -> None:
        self.client = client
        self.symbols = list(symbols)
        self.timers = timers
        self.render_now = render_now
        self.notifications = notifications
        self.update_interval_sec = update_interval_sec
        self.retry_delay_sec = retry_delay_sec
        self.notification_name = notification_name

        self.state = SchedulerState()
        self.snapshot = QuoteSnapshot.empty()
        self._timer_handle = None
        self._stopped = False
        # bumped on stop; completions from an older generation are dropped
        self._generation = 0

    def start(self) -> None:
        self._stopped = False
        self.fetch()

    def stop(self) -> None:
        self._stopped = True
        self._generation += 1
        self.state.in_flight = False
        if self._timer_handle is not None:
            self._timer_handle.cancel()
            self._timer_handle = None
        self.state.next_delay_sec = None

    def fetch(self) -> None:
        self._timer_handle = None
        if self._stopped or not self.state.retrying:
            return
        if self.state.in_flight:
            print("[FETCH][fetch_skip] reason=in_flight", flush=True)
            return

        if not self.symbols:
            was_loaded = self.state.loaded
            self._accept_snapshot(QuoteSnapshot.empty(fetched_at=int(time.time())))
            self.state.loaded = True
            self._schedule_next(was_loaded)
            return

        self.state.in_flight = True
        self.state.fetch_count += 1
        print(
            f"[FETCH][fetch_start] attempt={self.state.fetch_count} symbols={','.join(self.symbols)}",
            flush=True,
        )
        symbols = list(self.symbols)
        generation = self._generation
        self.timers.submit(
            lambda: self.client.get_batch(symbols),
            lambda response, exc: self._on_complete(response, exc, generation=generation),
        )

    def _on_complete(
        self,
        response: BatchQuoteResponse | None,
        exc: BaseException | None,
        *,
        generation: int | None = None,
    ) -> None:
        if self._stopped or (generation is not None and generation != self._generation):
            print("[FETCH][fetch_drop] reason=stopped", flush=True)
            return
        self.state.in_flight = False
        was_loaded = self.state.loaded

        if exc is not None:
            self._record_error(TransientFetchError(f"TRANSPORT_ERROR {exc}"))
        else:
            try:
                self.handle_response(response)
            except AuthorizationError as auth_exc:
                self._record_error(auth_exc)
                self.state.retrying = False
                self._render()
                print(
                    f"[FETCH][fetch_unauthorized] status={auth_exc.status_code} retrying=0",
                    flush=True,
                )
            except TransientFetchError as fetch_exc:
                self._record_error(fetch_exc)

        self.state.loaded = True
        if self.state.retrying:
            self._schedule_next(was_loaded)

    def handle_response(self, response: BatchQuoteResponse) -> QuoteSnapshot:
        """Classify one response; raises for the two failure classes."""
        self.state.last_status = response.status_code
        if response.status_code == 401:
            raise AuthorizationError(response.status_code)
        if response.status_code != 200:
            raise TransientFetchError("COULD_NOT_LOAD_DATA", status_code=response.status_code)

        snapshot = parse_batch(response.text, self.symbols)
        self._accept_snapshot(snapshot)
        return snapshot

    def _accept_snapshot(self, snapshot: QuoteSnapshot) -> None:
        first_load = not self.state.has_data
        self.snapshot = snapshot
        self.state.has_data = True
        self.state.success_count += 1
        self.state.last_error = None
        if first_load:
            self._render()
        print(
            f"[FETCH][fetch_ok] symbols={len(snapshot)} first_load={int(first_load)}",
            flush=True,
        )
        if self.notifications is not None:
            self.notifications.publish(self.notification_name, snapshot.raw)

    def _record_error(self, exc: Exception) -> None:
        self.state.error_count += 1
        self.state.last_error = str(exc)
        status = getattr(exc, "status_code", None)
        print(f"[FETCH][fetch_error] status={status} error={exc}", flush=True)

    def _render(self) -> None:
        if self.render_now is not None:
            self.render_now()

    def _schedule_next(self, was_loaded: bool) -> None:
        if self._stopped:
            return
        delay = self.update_interval_sec if was_loaded else self.retry_delay_sec
        self.state.next_delay_sec = delay
        self._timer_handle = self.timers.call_later(delay, self.fetch)

    def metrics(self) -> dict:
        out = self.state.model_dump()
        out["snapshot_symbols"] = len(self.snapshot)
        return out
