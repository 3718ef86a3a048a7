from __future__ import annotations

import time

from display_stocks.schemas.display import DisplayRow, DisplayView
from display_stocks.schemas.pagination import PaginationState
from display_stocks.schemas.quote import QuoteSnapshot
from display_stocks.services.formatting import currency_from_culture, format_change, format_currency

MISSING_KEY_MESSAGE = "No API Key Provided"
UNKNOWN_PRICE = "Unknown"


class DisplayRenderer:
    """Turns a snapshot and the pagination state into a DisplayView."""

    def __init__(
        self,
        *,
        language: str = "en",
        country_code: str = "US",
        container_class: str = "medium",
        animation_speed_ms: int = 0,
    ) -> None:
        self.culture = f"{language}-{country_code}"
        self.currency = currency_from_culture(self.culture)
        self.container_class = container_class or "medium"
        self.animation_speed_ms = animation_speed_ms

    def render_row(self, symbol: str, snapshot: QuoteSnapshot) -> DisplayRow:
        quote = snapshot.get(symbol)
        if quote is None:
            return DisplayRow(symbol=symbol, price_text=f"{symbol}: {UNKNOWN_PRICE}", change_text="")
        price = format_currency(quote.latest_price, self.culture, self.currency)
        return DisplayRow(
            symbol=symbol,
            price_text=f"{symbol}: {price}",
            change_text=format_change(quote.change),
        )

    def render(self, snapshot: QuoteSnapshot, pagination: PaginationState) -> DisplayView:
        rows = [self.render_row(symbol, snapshot) for symbol in pagination.visible_symbols()]
        return DisplayView(
            container_class=self.container_class,
            rows=rows,
            current_page=pagination.current_page,
            page_count=pagination.page_count,
            pagination_active=pagination.pagination_active,
            animation_speed_ms=self.animation_speed_ms,
            rendered_at=int(time.time()),
        )

    def render_missing_key(self) -> DisplayView:
        return DisplayView(
            container_class=self.container_class,
            message=MISSING_KEY_MESSAGE,
            animation_speed_ms=self.animation_speed_ms,
            rendered_at=int(time.time()),
        )
