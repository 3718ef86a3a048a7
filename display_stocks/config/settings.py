import os
from functools import lru_cache

from pydantic import BaseModel, Field, field_validator

_ENV_PREFIX = "DISPLAY_STOCKS_"

_ENV_FIELDS = (
    "APP_ID",
    "UPDATE_INTERVAL_MS",
    "RETRY_DELAY_MS",
    "LANGUAGE",
    "TWO_DIGIT_COUNTRY_CODE",
    "CONTAINER_CLASS",
    "PAGINATE",
    "ANIMATION_SPEED_MS",
    "API_BASE_URL",
    "REQUEST_TIMEOUT_SEC",
)


class WidgetSettings(BaseModel):
    APP_ID: str | None = None
    SYMBOLS: list[str] = Field(default_factory=list)
    UPDATE_INTERVAL_MS: int = Field(default=180000, gt=0)
    RETRY_DELAY_MS: int = Field(default=5000, ge=0)
    LANGUAGE: str = "en"
    TWO_DIGIT_COUNTRY_CODE: str = "US"
    CONTAINER_CLASS: str = "medium"
    PAGINATE: bool = True
    ANIMATION_SPEED_MS: int = Field(default=0, ge=0)
    API_BASE_URL: str = "https://cloud.iexapis.com/v1"
    REQUEST_TIMEOUT_SEC: float | None = Field(default=None, gt=0)

    @field_validator("APP_ID")
    @classmethod
    def _blank_app_id_is_missing(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()

    @property
    def update_interval_sec(self) -> float:
        return self.UPDATE_INTERVAL_MS / 1000.0

    @property
    def retry_delay_sec(self) -> float:
        return self.RETRY_DELAY_MS / 1000.0

    @property
    def culture(self) -> str:
        return f"{self.LANGUAGE}-{self.TWO_DIGIT_COUNTRY_CODE}"

    @classmethod
    def from_env(cls) -> "WidgetSettings":
        raw_symbols = os.getenv(f"{_ENV_PREFIX}SYMBOLS", "")
        symbols = [s.strip() for s in raw_symbols.split(",") if s.strip()]

        # unset variables fall back to the model defaults
        values: dict[str, object] = {"SYMBOLS": symbols}
        for name in _ENV_FIELDS:
            raw = os.getenv(f"{_ENV_PREFIX}{name}")
            if raw is not None and raw != "":
                values[name] = raw

        return cls.model_validate(values)


@lru_cache
def get_settings() -> WidgetSettings:
    return WidgetSettings.from_env()
