# pickbook/config.py

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    redis_url: str = "redis://localhost:6379/0"

    # Fixed keys of the persisted documents
    reservations_key: str = "pick:reservations"
    settings_key: str = "pick:settings"
    audit_key: str = "pick:audit"

    store_max_retries: int = 5

    # Calendar hint thresholds (ratio of free capacity over the day)
    availability_limited_below: float = 0.3
    availability_full_at_or_below: float = 0.0

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )


settings = Settings()
