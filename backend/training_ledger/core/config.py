"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Training Ledger API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Store - in-memory SQLite is the authoritative ledger
    DATABASE_URL: str = "sqlite+aiosqlite://"
    DATABASE_ECHO: bool = False

    # Units: every amount is an integer count of the smallest unit.
    # FEE_UNIT smallest units make one booking fee.
    FEE_UNIT: int = 1_000_000_000
    INITIAL_BALANCE_UNITS: int = 10

    # Admin selection entropy: "system" or "fixed"
    ENTROPY_SOURCE: str = "system"
    FIXED_ENTROPY_SEED: int = 0
    FIXED_TIMESTAMP: int = 0

    # Redis schedule cache
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_CACHE_TTL: int = 60
    REDIS_ENABLED: bool = False

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }

    @property
    def booking_fee(self) -> int:
        return self.FEE_UNIT

    @property
    def initial_participant_balance(self) -> int:
        return self.INITIAL_BALANCE_UNITS * self.FEE_UNIT


@lru_cache()
def get_settings() -> Settings:
    return Settings()
