from pydantic import BaseModel, Field


class DisplayRow(BaseModel):
    symbol: str
    price_text: str
    change_text: str


class DisplayView(BaseModel):
    container_class: str = "medium"
    message: str | None = None
    rows: list[DisplayRow] = Field(default_factory=list)
    current_page: int = 1
    page_count: int = 1
    pagination_active: bool = False
    animation_speed_ms: int = 0
    rendered_at: int
