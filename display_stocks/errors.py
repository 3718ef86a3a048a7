class DisplayStocksError(Exception):
    """Base error for the quote display service."""


class ConfigurationError(DisplayStocksError):
    """Required configuration (the API credential) is missing."""


class AuthorizationError(DisplayStocksError):
    """The market-data API rejected the credential (HTTP 401)."""

    def __init__(self, status_code: int = 401) -> None:
        super().__init__(f"UNAUTHORIZED status={status_code}")
        self.status_code = status_code


class TransientFetchError(DisplayStocksError):
    """A fetch failed in a way that is retried on the normal cadence."""

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code
