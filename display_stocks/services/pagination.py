from __future__ import annotations

import math
from typing import Callable

from display_stocks.schemas.pagination import PaginationState

PAGE_SIZE = 5
ROTATION_INTERVAL_SEC = 5.0


def chunk_symbols(symbols: list[str], size: int) -> list[list[str]]:
    return [symbols[i:i + size] for i in range(0, len(symbols), size)]


class PaginationRotator:
    """Decides which page of symbols is visible and cycles it on a timer."""

    def __init__(
        self,
        *,
        timers,
        enabled: bool = True,
        page_size: int = PAGE_SIZE,
        rotation_interval_sec: float = ROTATION_INTERVAL_SEC,
        on_rotate: Callable[[], None] | None = None,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        self.timers = timers
        self.enabled = enabled
        self.page_size = page_size
        self.rotation_interval_sec = rotation_interval_sec
        self.on_rotate = on_rotate
        self.state = PaginationState()
        self._rotation_handle = None

    def refresh(self, symbols: list[str]) -> PaginationState:
        state = self.state
        state.pages = chunk_symbols(list(symbols), self.page_size)
        state.page_count = max(1, math.ceil(len(symbols) / self.page_size))
        # a shrinking watch-list must not leave the index past the last page
        state.current_page = min(max(state.current_page, 1), state.page_count)

        if len(symbols) > self.page_size:
            state.pagination_active = True
            if self.enabled and not state.rotation_started:
                state.rotation_started = True
                self._rotation_handle = self.timers.call_every(self.rotation_interval_sec, self.rotate)
                print(
                    f"[PAGE][rotation_start] page_count={state.page_count} "
                    f"interval_sec={self.rotation_interval_sec}",
                    flush=True,
                )
        return state

    def rotate(self) -> int:
        state = self.state
        state.current_page = state.current_page % state.page_count + 1
        if self.on_rotate is not None:
            self.on_rotate()
        return state.current_page

    def stop(self) -> None:
        if self._rotation_handle is not None:
            self._rotation_handle.cancel()
            self._rotation_handle = None
