from __future__ import annotations

from typing import Any, Callable

QUOTES_NOTIFICATION = "DISPLAY_STOCKS_QUOTES"


class NotificationChannel:
    """Named in-process pub/sub for collaborators outside the render path."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Callable[[Any], None]]] = {}
        self._last_payload: dict[str, Any] = {}
        self.published = 0
        self.delivery_errors = 0

    def subscribe(self, name: str, callback: Callable[[Any], None]) -> None:
        self._subscribers.setdefault(name, []).append(callback)

    def unsubscribe(self, name: str, callback: Callable[[Any], None]) -> None:
        callbacks = self._subscribers.get(name, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def publish(self, name: str, payload: Any) -> int:
        self._last_payload[name] = payload
        self.published += 1
        delivered = 0
        for callback in list(self._subscribers.get(name, [])):
            try:
                callback(payload)
                delivered += 1
            except Exception as exc:
                self.delivery_errors += 1
                print(f"[NOTIFY][subscriber_error] name={name} error={exc}", flush=True)
        return delivered

    def last_payload(self, name: str) -> Any | None:
        return self._last_payload.get(name)
