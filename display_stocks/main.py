from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from display_stocks.api.routes import router
from display_stocks.config.settings import get_settings
from display_stocks.services.notifications import NotificationChannel
from display_stocks.services.timers import AsyncioTimers
from display_stocks.services.widget import StockDisplayWidget


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.get_settings()
    widget = StockDisplayWidget(
        settings,
        timers=AsyncioTimers(),
        session=app.state.http_session,
        notifications=app.state.notifications,
    )
    app.state.widget = widget
    widget.start()
    try:
        yield
    finally:
        widget.stop()
        app.state.widget = None


app = FastAPI(title="Display Stocks", version="0.1.0", lifespan=lifespan)
app.include_router(router, prefix="/v1")

# NOTE: lazy-loaded so app import does not require env during tests.
app.state.get_settings = get_settings
app.state.http_session = None
app.state.notifications = NotificationChannel()
app.state.widget = None
