from __future__ import annotations

from typing import Any

from display_stocks.config.settings import WidgetSettings
from display_stocks.errors import ConfigurationError
from display_stocks.integrations.iex_rest import IexQuoteClient, normalize_symbols
from display_stocks.schemas.display import DisplayView
from display_stocks.schemas.pagination import PaginationState
from display_stocks.schemas.quote import QuoteSnapshot
from display_stocks.services.fetch_scheduler import FetchScheduler
from display_stocks.services.notifications import NotificationChannel
from display_stocks.services.pagination import PaginationRotator
from display_stocks.services.renderer import DisplayRenderer


def display_symbols(snapshot: QuoteSnapshot, requested: list[str]) -> list[str]:
    """Snapshot key order first, then requested symbols missing from it."""
    out = snapshot.symbols()
    present = set(out)
    for symbol in requested:
        if symbol not in present:
            out.append(symbol)
    return out


class StockDisplayWidget:
    def __init__(
        self,
        settings: WidgetSettings,
        *,
        timers,
        client: Any | None = None,
        session: Any | None = None,
        renderer: DisplayRenderer | None = None,
        notifications: NotificationChannel | None = None,
    ) -> None:
        self.settings = settings
        self.timers = timers
        self.symbols = normalize_symbols(settings.SYMBOLS)
        self.notifications = notifications or NotificationChannel()
        self.renderer = renderer or DisplayRenderer(
            language=settings.LANGUAGE,
            country_code=settings.TWO_DIGIT_COUNTRY_CODE,
            container_class=settings.CONTAINER_CLASS,
            animation_speed_ms=settings.ANIMATION_SPEED_MS,
        )
        if client is None and settings.APP_ID:
            client = IexQuoteClient(
                app_id=settings.APP_ID,
                base_url=settings.API_BASE_URL,
                session=session,
                timeout=settings.REQUEST_TIMEOUT_SEC,
            )
        self.client = client

        self.scheduler = FetchScheduler(
            client=client,
            symbols=self.symbols,
            timers=timers,
            render_now=self.render,
            notifications=self.notifications,
            update_interval_sec=settings.update_interval_sec,
            retry_delay_sec=settings.retry_delay_sec,
        )
        self.rotator = PaginationRotator(
            timers=timers,
            enabled=settings.PAGINATE,
            on_rotate=self.render,
        )

        self.last_view: DisplayView | None = None
        self.render_count = 0
        self.started = False
        self._render_timer = None

    @property
    def snapshot(self) -> QuoteSnapshot:
        return self.scheduler.snapshot

    @property
    def pagination(self) -> PaginationState:
        return self.rotator.state

    @property
    def has_credentials(self) -> bool:
        return bool(self.settings.APP_ID)

    def start(self) -> None:
        if self.started:
            return
        self.started = True
        if not self.has_credentials:
            error = ConfigurationError("MISSING_APP_ID")
            print(f"[WIDGET][config_error] error={error}", flush=True)
            self.render()
            return

        print(
            f"[WIDGET][start] symbols={len(self.symbols)} "
            f"update_interval_sec={self.settings.update_interval_sec} "
            f"retry_delay_sec={self.settings.retry_delay_sec}",
            flush=True,
        )
        self.scheduler.start()
        self._render_timer = self.timers.call_every(self.settings.update_interval_sec, self.render)

    def stop(self) -> None:
        if self._render_timer is not None:
            self._render_timer.cancel()
            self._render_timer = None
        self.scheduler.stop()
        self.rotator.stop()
        self.started = False
        print("[WIDGET][stop]", flush=True)

    def render(self) -> DisplayView:
        if not self.has_credentials:
            view = self.renderer.render_missing_key()
        else:
            snapshot = self.scheduler.snapshot
            # nothing to page through until the first snapshot arrives
            symbols = display_symbols(snapshot, self.symbols) if self.scheduler.state.has_data else []
            pagination = self.rotator.refresh(symbols)
            view = self.renderer.render(snapshot, pagination)
        self.last_view = view
        self.render_count += 1
        return view
