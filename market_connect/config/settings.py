"""Configuration settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Backend database
    database_url: str = "postgresql+asyncpg://localhost/market_connect"

    # Simulated payment
    payment_delay_seconds: float = 2.0

    # Analytics
    analytics_window_days: int = 7
    recent_activity_limit: int = 10

    # Business registration
    default_subscription_plan: str = "business"

    # Logging
    log_level: str = "INFO"

    # Application
    app_name: str = "market-connect"
    environment: str = "development"

    @property
    def is_sqlite(self) -> bool:
        """Check whether the backend URL points at SQLite (tests, local dev)."""
        return self.database_url.startswith("sqlite")


def load_settings() -> Settings:
    """Load and validate settings from environment."""
    return Settings()
