from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LUCRO_REAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Lucro Real Tax Engine"

    # Monthly IRPJ surtax exemption (R$ 20.000/month), scaled by the period
    irpj_monthly_threshold: float = 20000.0

    # Per-engine memoization size, keyed on configuration equality
    cache_size: int = 256

    log_level: str = "INFO"
    log_file: Optional[str] = None


@lru_cache()
def get_settings() -> Settings:
    return Settings()
