from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = Field(default=Path(".cache") / "ledger", alias="LEDGER_DATA_DIR")
    storage_key: str = Field(default="expenseTrackerTransactions", alias="LEDGER_STORAGE_KEY")

    timezone: str = Field(default="Asia/Jerusalem", alias="LEDGER_TZ")
    currency_symbol: str = Field(default="₪", alias="LEDGER_CURRENCY")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    def validate_required(self) -> None:
        if not self.storage_key.strip():
            raise ValueError("LEDGER_STORAGE_KEY must not be empty")

        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"LEDGER_TZ is not a known timezone: {self.timezone}") from e

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


@lru_cache
def load_settings() -> Settings:
    settings = Settings()
    settings.validate_required()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings
