from pydantic import BaseModel, Field


class PaginationState(BaseModel):
    current_page: int = 1
    page_count: int = 1
    pagination_active: bool = False
    rotation_started: bool = False
    pages: list[list[str]] = Field(default_factory=list)

    def visible_symbols(self) -> list[str]:
        if not self.pages:
            return []
        if not self.rotation_started:
            return [symbol for page in self.pages for symbol in page]
        return list(self.pages[self.current_page - 1])
