from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Fields are type-checked and validated. Defaults are provided where appropriate.
    """
    # Application
    app_env: str = "local"
    log_level: str = "DEBUG"

    # Data paths
    data_dir: str = "sample_data"
    export_dir: str = "exports"

    # Presentation
    currency_symbol: str = "$"

    # Order lifecycle
    enforce_forward_transitions: bool = False

    # Kitchen preparation (empty list means every status is included)
    preparation_statuses: List[str] = []

    # Revenue reporting
    revenue_statuses: List[str] = ["paid"]
    moving_average_window: int = 7
    top_items_limit: int = 5

    # Seed data settings
    default_seed_days: int = 14
    default_seed_value: int = 42
    default_seed_orders_per_day: int = 6

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def set_config_for_test(**kwargs):
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)
