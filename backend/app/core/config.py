"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import Dict, List, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Ledger Reconciliation"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./ledger.db"
    DB_ECHO: bool = False

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:8080"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Money
    DEFAULT_CURRENCY: str = "INR"
    CURRENCY_EXPONENTS: Dict[str, int] = {}  # Overrides for the built-in minor unit table, e.g. {"ISK": 0}
    LEDGER_IMBALANCE_FACTOR: int = 2  # Allowed |sum of balances| in half minor units before UnbalancedInput

    @field_validator("DEFAULT_CURRENCY", mode="before")
    @classmethod
    def upper_currency(cls, v):
        """Currency codes are stored upper-case."""
        return v.upper() if isinstance(v, str) else v

    # Limits
    MAX_PARTICIPANTS: int = 20
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
