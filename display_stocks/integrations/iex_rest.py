from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

import requests

from display_stocks.errors import TransientFetchError
from display_stocks.schemas.quote import Quote, QuoteSnapshot


def normalize_symbols(symbols: Iterable[Any]) -> list[str]:
    """Trim and uppercase tickers, dropping blanks. Duplicates are kept."""
    out: list[str] = []
    for symbol in symbols:
        value = str(symbol).strip().upper()
        if value:
            out.append(value)
    return out


@dataclass(frozen=True)
class BatchQuoteResponse:
    status_code: int
    text: str


def _to_float(value: Any, *, field_name: str) -> float:
    try:
        if value is None or value == "" or isinstance(value, bool):
            raise ValueError(f"missing value for {field_name}")
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid numeric value for {field_name}: {value!r}") from exc


def _to_float_default(value: Any, default: float = 0.0) -> float:
    try:
        if value is None or value == "" or isinstance(value, bool):
            return default
        return float(value)
    except (TypeError, ValueError):
        return default


def _parse_entry(symbol: str, entry: Any) -> Quote:
    if not isinstance(entry, dict):
        raise ValueError("entry must be an object")
    quote = entry.get("quote")
    if not isinstance(quote, dict):
        raise ValueError("missing quote in entry")
    return Quote(
        symbol=symbol,
        latest_price=_to_float(quote.get("latestPrice"), field_name="latestPrice"),
        change=_to_float_default(quote.get("change")),
    )


def parse_batch(text: str, symbols: list[str], *, now: int | None = None) -> QuoteSnapshot:
    """Parse a batch quote body into a snapshot of the requested symbols.

    Keys keep the response order. A requested symbol whose entry is missing or
    unusable is left out of the snapshot instead of failing the batch.
    """
    if text is None or not text.strip():
        raise TransientFetchError("EMPTY_BODY")
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TransientFetchError("MALFORMED_BODY") from exc
    if not isinstance(decoded, dict):
        raise TransientFetchError("MALFORMED_BODY")

    requested = set(symbols)
    quotes: Dict[str, Quote] = {}
    raw: Dict[str, Any] = {}
    for key, entry in decoded.items():
        symbol = str(key).strip().upper()
        if symbol not in requested or symbol in quotes:
            continue
        try:
            quotes[symbol] = _parse_entry(symbol, entry)
        except ValueError as exc:
            print(f"[FETCH][quote_entry_skip] symbol={symbol} reason={exc}", flush=True)
            continue
        raw[symbol] = entry

    return QuoteSnapshot(
        quotes=quotes,
        raw=raw,
        fetched_at=int(time.time()) if now is None else now,
    )


class IexQuoteClient:
    """Batched quote client for the IEX Cloud market endpoint."""

    _DEFAULT_BASE_URL = "https://cloud.iexapis.com/v1"
    _BATCH_PATH = "/stock/market/batch"

    def __init__(
        self,
        app_id: str,
        base_url: Optional[str] = None,
        session: Optional[Any] = None,
        timeout: Optional[float] = None,
    ) -> None:
        if not app_id:
            raise ValueError("app_id is required")

        self.app_id = app_id
        self.base_url = (base_url or self._DEFAULT_BASE_URL).rstrip("/")
        self.session = session or requests
        self.timeout = timeout

    def build_batch_params(self, symbols: Iterable[str]) -> Dict[str, str]:
        return {
            "types": "quote",
            "symbols": ",".join(normalize_symbols(symbols)),
            "token": self.app_id,
        }

    def get_batch(self, symbols: Iterable[str]) -> BatchQuoteResponse:
        """Issue one request for every symbol. HTTP errors are returned, not raised."""
        response = self.session.get(
            f"{self.base_url}{self._BATCH_PATH}",
            params=self.build_batch_params(symbols),
            timeout=self.timeout,
        )
        return BatchQuoteResponse(
            status_code=int(response.status_code),
            text=response.text or "",
        )
