from pydantic import BaseModel, Field


class Quote(BaseModel):
    symbol: str
    latest_price: float
    change: float


class QuoteSnapshot(BaseModel):
    """Complete set of quotes from one fetch. Replaced wholesale, never merged."""

    quotes: dict[str, Quote] = Field(default_factory=dict)
    raw: dict = Field(default_factory=dict)
    fetched_at: int | None = None

    @classmethod
    def empty(cls, fetched_at: int | None = None) -> "QuoteSnapshot":
        return cls(quotes={}, raw={}, fetched_at=fetched_at)

    def get(self, symbol: str) -> Quote | None:
        return self.quotes.get(symbol)

    def symbols(self) -> list[str]:
        return list(self.quotes.keys())

    def same_data(self, other: "QuoteSnapshot") -> bool:
        return self.quotes == other.quotes and self.raw == other.raw

    def __len__(self) -> int:
        return len(self.quotes)
