from functools import lru_cache

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    EXCHANGE_RATE_PROVIDER, RATES_REFRESH_INTERVAL_SECONDS).
    """

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    # Basic app metadata
    app_name: str = "Shared Expense Tracker"
    debug: bool = False
    version: str = "0.1.0"

    # Exchange rates
    # Base currency code is appended to this URL when fetching.
    exchange_api_base_url: AnyHttpUrl = "https://api.exchangerate-api.com/v4/latest"
    http_timeout_seconds: float = Field(5.0, gt=0)

    # Allowed: 'external-http' (live endpoint), 'static' (built-in fixed table)
    exchange_rate_provider: str = "external-http"

    # Periodic refresh (1 hour)
    rates_refresh_interval_seconds: int = Field(3600, gt=0)
    rates_refresh_enabled: bool = True

    # Transient notifications kept until the next page render
    notifications_max: int = Field(20, gt=0)

    def init_post_load(self) -> None:
        """Validate derived / enumerated fields."""
        allowed = {"static", "external-http"}
        if self.exchange_rate_provider not in allowed:
            raise ValueError(
                f"Unsupported exchange_rate_provider '{self.exchange_rate_provider}'. Allowed: {allowed}"
            )

    @property
    def exchange_api_url(self) -> str:
        return str(self.exchange_api_base_url).rstrip("/")


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
