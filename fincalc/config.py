"""
Application settings.

Loads configuration from environment variables (prefix ``FINCALC_``) and an
optional ``.env`` file using pydantic-settings.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CurrencyStyle = Literal["indian", "international", "european", "minimal"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FINCALC_",
        env_file=".env",
        extra="ignore",
    )

    # HTTP
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"]
    )
    port: int = 5000

    # Logging
    log_level: str = "INFO"

    # Presentation
    currency_style: CurrencyStyle = "indian"
    max_breakdown_years: int = Field(20, ge=1, description="Rows shown in closed-form breakdowns.")

    # Gratuity Act limits
    gratuity_cap: float = 2_000_000.0
    gratuity_tax_free_uncovered: float = 1_000_000.0

    # Registry cache of recent input/result pairs
    result_cache_size: int = Field(128, ge=0)


@lru_cache
def get_settings() -> Settings:
    return Settings()
