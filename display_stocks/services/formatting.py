from __future__ import annotations

from dataclasses import dataclass

ARROW_UP = "⭡"
ARROW_DOWN = "⭣"

_COUNTRY_CURRENCIES = {
    "US": "USD",
}
_DEFAULT_CURRENCY = "USD"

_CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
}


@dataclass(frozen=True)
class _NumberStyle:
    group: str
    decimal: str
    symbol_first: bool


_EN_STYLE = _NumberStyle(group=",", decimal=".", symbol_first=True)

_LANGUAGE_STYLES = {
    "en": _EN_STYLE,
    "de": _NumberStyle(group=".", decimal=",", symbol_first=False),
    "es": _NumberStyle(group=".", decimal=",", symbol_first=False),
    "it": _NumberStyle(group=".", decimal=",", symbol_first=False),
    "nl": _NumberStyle(group=".", decimal=",", symbol_first=True),
    "fr": _NumberStyle(group=" ", decimal=",", symbol_first=False),
    "ja": _EN_STYLE,
}


def currency_from_culture(culture: str) -> str:
    """Resolve the currency code for a `language-COUNTRY` culture.

    Only "US" is mapped; every other country currently resolves to USD too.
    """
    parts = (culture or "").split("-", 1)
    country = parts[1].strip().upper() if len(parts) == 2 else ""
    return _COUNTRY_CURRENCIES.get(country, _DEFAULT_CURRENCY)


def format_currency(value: float, culture: str, currency: str | None = None) -> str:
    code = currency or currency_from_culture(culture)
    language = (culture or "").split("-", 1)[0].strip().lower()
    style = _LANGUAGE_STYLES.get(language, _EN_STYLE)

    amount = round(float(value), 2)
    sign = "-" if amount < 0 else ""
    whole, _, fraction = f"{abs(amount):,.2f}".partition(".")
    number = whole.replace(",", style.group) + style.decimal + fraction

    symbol = _CURRENCY_SYMBOLS.get(code, code)
    if style.symbol_first:
        joiner = "" if symbol != code else " "
        return f"{sign}{symbol}{joiner}{number}"
    return f"{sign}{number} {symbol}"


def format_number(value: float) -> str:
    """Plain numeric text without a trailing `.0` on whole numbers."""
    text = repr(float(value) + 0.0)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def format_change(change: float) -> str:
    arrow = ARROW_UP if change >= 0 else ARROW_DOWN
    return f"{arrow}({format_number(change)})"
