# src/lendrate/adapters/config.py
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # Pricing
    PRICING_MAX_OPTIONS: int = Field(default=10)
    PRICING_TTL_HOURS: float = Field(default=24.0)

    # Reference-rate DSCR estimate
    DSCR_REFERENCE_RATE: float = Field(default=0.065)
    DSCR_REFERENCE_TERM_YEARS: int = Field(default=30)

    # -----------------------------
    # Rate providers
    # -----------------------------
    LOANSIFTER_API_KEY: str | None = Field(default=None)
    LOANSIFTER_BASE_URL: str = Field(default="https://api.loansifter.com/v1")

    LENDERPRICE_API_KEY: str | None = Field(default=None)
    LENDERPRICE_BASE_URL: str = Field(default="https://api.lenderprice.com/v1")

    PROVIDER_TIMEOUT_S: float = Field(default=20.0)
    PROVIDER_MAX_RETRIES: int = Field(default=3)
    PROVIDER_BACKOFF_BASE_S: float = Field(default=0.8)

    # Background catalog refresh
    SYNC_WORKERS: int = Field(default=2)

    model_config = SettingsConfigDict(
        env_prefix="LENDRATE_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("DSCR_REFERENCE_RATE", mode="before")
    @classmethod
    def _to_fraction(cls, v: Any) -> Any:
        if v is None:
            return v
        if isinstance(v, str):
            v = v.strip().replace("%", "")
        try:
            f = float(v)
        except Exception as err:
            raise ValueError("rate must be numeric or percent-like") from err
        if f > 1.0:
            f = f / 100.0
        if f < 0:
            raise ValueError("rate must be non-negative")
        return f

    @field_validator(
        "PRICING_MAX_OPTIONS",
        "PRICING_TTL_HOURS",
        "DSCR_REFERENCE_TERM_YEARS",
        "SYNC_WORKERS",
        mode="before",
    )
    @classmethod
    def _positive(cls, v: Any) -> Any:
        f = float(v)
        if f <= 0:
            raise ValueError("value must be > 0")
        return v


config = AppConfig()
