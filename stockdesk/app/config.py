from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from stockdesk.sdk.config import ConfigError, env_text, read_float, read_int, validate


@dataclass(frozen=True)
class AppConfig:
    data_dir: Path | None = None
    products_page_size: int = 12
    transactions_page_size: int = 10
    flash_seconds: float = 2.0
    error_flash_seconds: float = 3.0
    dashboard_window_days: int = 30

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "AppConfig":
        load_dotenv(env_file)
        data_dir = env_text("STOCKDESK_DATA_DIR")
        config = cls(
            data_dir=Path(data_dir).expanduser() if data_dir else None,
            products_page_size=read_int("STOCKDESK_PRODUCTS_PAGE_SIZE", 12),
            transactions_page_size=read_int("STOCKDESK_TRANSACTIONS_PAGE_SIZE", 10),
            flash_seconds=read_float("STOCKDESK_FLASH_SECONDS", 2.0),
            error_flash_seconds=read_float("STOCKDESK_ERROR_FLASH_SECONDS", 3.0),
            dashboard_window_days=read_int("STOCKDESK_DASHBOARD_WINDOW_DAYS", 30),
        )
        config.validate()
        return config

    def validate(self) -> None:
        validate(self.products_page_size >= 1, "STOCKDESK_PRODUCTS_PAGE_SIZE must be >= 1")
        validate(self.transactions_page_size >= 1, "STOCKDESK_TRANSACTIONS_PAGE_SIZE must be >= 1")
        validate(self.flash_seconds >= 0, "STOCKDESK_FLASH_SECONDS must be >= 0")
        validate(self.error_flash_seconds >= 0, "STOCKDESK_ERROR_FLASH_SECONDS must be >= 0")
        validate(self.dashboard_window_days >= 1, "STOCKDESK_DASHBOARD_WINDOW_DAYS must be >= 1")


__all__ = ["AppConfig", "ConfigError"]
