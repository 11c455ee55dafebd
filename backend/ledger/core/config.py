"""
Application configuration and environment settings.
"""
from decimal import Decimal
from functools import lru_cache
from typing import List, Union

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import BaseSettings


class LedgerDefaults(BaseModel):
    """Defaults passed explicitly into the engine instead of living in schema declarations."""
    model_config = ConfigDict(frozen=True)

    default_currency: str = "TRY"
    supported_currencies: tuple = ("TRY", "USD", "EUR", "GBP")
    default_split_method: str = "equal"
    default_alert_threshold: Decimal = Decimal(80)
    invite_code_length: int = 6
    invite_code_attempts: int = 5
    notification_ttl_days: int = 7
    default_group_icon: str = "👥"
    default_category_icon: str = "📦"
    default_color: str = "#3B82F6"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Ledger"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:8080"]

    @field_validator("CORS_ORIGINS", "SUPPORTED_CURRENCIES", mode="before")
    @classmethod
    def parse_comma_separated(cls, v):
        """Parse list settings from comma-separated string or list."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    # Money
    DEFAULT_CURRENCY: str = "TRY"
    SUPPORTED_CURRENCIES: Union[List[str], str] = ["TRY", "USD", "EUR", "GBP"]

    # Splits and budgets
    DEFAULT_SPLIT_METHOD: str = "equal"  # Options: "equal", "percentage", "custom"
    DEFAULT_ALERT_THRESHOLD: Decimal = Decimal(80)  # Percentage of budget used before alerting

    # Groups
    INVITE_CODE_LENGTH: int = 6
    INVITE_CODE_ATTEMPTS: int = 5  # Retries against the caller's uniqueness check

    # Notifications
    NOTIFICATION_TTL_DAYS: int = 7

    class Config:
        env_file = ".env"
        case_sensitive = True

    def ledger_defaults(self) -> LedgerDefaults:
        """Build the engine defaults structure from these settings."""
        return LedgerDefaults(
            default_currency=self.DEFAULT_CURRENCY.upper(),
            supported_currencies=tuple(c.upper() for c in self.SUPPORTED_CURRENCIES),
            default_split_method=self.DEFAULT_SPLIT_METHOD,
            default_alert_threshold=self.DEFAULT_ALERT_THRESHOLD,
            invite_code_length=self.INVITE_CODE_LENGTH,
            invite_code_attempts=self.INVITE_CODE_ATTEMPTS,
            notification_ttl_days=self.NOTIFICATION_TTL_DAYS,
        )


settings = Settings()


@lru_cache
def get_defaults() -> LedgerDefaults:
    """Engine defaults derived from the process settings."""
    return settings.ledger_defaults()
