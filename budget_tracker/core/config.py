from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG, DATA_DIR,
    DB_FILENAME, EXCHANGE_RATE_PROVIDER, RATES_REFRESH_SECONDS).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Budget Tracker"
    debug: bool = False
    version: str = "0.1.0"

    # Local storage
    data_dir: Path = Path("data")
    db_filename: str = "budget.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided

    # Currencies
    base_currency: str = "USD"  # pivot all fetched rates are relative to
    default_display_currency: str = "USD"

    # Exchange rates
    exchange_api_url: str = "https://api.exchangerate-api.com/v4/latest/USD"
    exchange_rate_provider: str = "external-http"
    http_timeout_seconds: float = 5.0
    rates_refresh_seconds: int = 3600  # 1 hour
    rates_refresh_enabled: bool = True

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.base_currency = self.base_currency.upper()
        self.default_display_currency = self.default_display_currency.upper()
        allowed = {"static", "external-http"}
        if self.exchange_rate_provider not in allowed:
            raise ValueError(
                f"Unsupported exchange_rate_provider '{self.exchange_rate_provider}'. Allowed: {allowed}"
            )
        if self.rates_refresh_seconds <= 0:
            raise ValueError("rates_refresh_seconds must be positive")


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
