from __future__ import annotations
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import List


class Settings(BaseSettings):
    """Application configuration loaded from environment variables (.env)."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # --- Runtime / Logging ---
    ENV: str = "development"  # development | staging | production
    LOG_LEVEL: str = "INFO"    # INFO, DEBUG, WARNING, ERROR
    JSON_LOGS: bool = False
    LOG_FILE_PATH: str | None = None

    # --- Financials proxy (DART) ---
    API_BASE_URL: str | None = "http://127.0.0.1:8000"
    HTTP_TIMEOUT_SECONDS: float | None = None  # None = wait for the proxy

    # --- Export target ---
    COMPANY_ID: str = "00244455"  # KT&G 고유 코드
    COMPANY_NAME: str = "KT&G"
    LATEST_YEAR: int = 2024
    YEAR_SPAN: int = 15
    DEFAULT_START_YEAR: str = "2022"
    DEFAULT_END_YEAR: str = "2022"
    EXPORT_DIR: str | None = None  # also save each CSV here when set

    # --- CORS ---
    CORS_ALLOW_ORIGINS: str = "*"  # comma-separated list or "*"

    # Helper: parse comma-separated origins → list, with fallback
    @property
    def cors_origins(self) -> List[str]:
        raw = (self.CORS_ALLOW_ORIGINS or "*").strip()
        if raw == "*":
            return ["*"]
        return [s.strip() for s in raw.split(',') if s.strip()]


def selectable_years(settings: Settings) -> List[str]:
    """Years offered by the form, newest first."""
    return [str(settings.LATEST_YEAR - i) for i in range(settings.YEAR_SPAN)]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
