"""Configuration management using Pydantic Settings"""

from datetime import date
from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "dues-gateway"
    log_level: str = "INFO"

    # Billing defaults, used until the association's configuration is pushed
    billing_monthly_amount: Decimal = Decimal("50")  # split into two sub-periods
    billing_closing_day: int = 14
    billing_due_day: int = 15
    billing_grace_period_days: int = 3
    billing_late_fee_pct: Decimal = Decimal("0")
    billing_penalty_fee_pct: Decimal = Decimal("0")
    billing_cutoff_date: date = date(2025, 1, 15)


settings = Settings()
