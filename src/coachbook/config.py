from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="COACHBOOK_",
        case_sensitive=False,
    )

    # App
    env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    db_url: str = "sqlite+aiosqlite:///./coachbook.db"

    # Scheduling
    timezone: str = "UTC"  # zone used to read weekday/time-of-day off a booking instant
    session_durations: list[int] = [30, 60, 90, 120]

    # Storage retries (HTTP boundary only)
    storage_retry_attempts: int = 3
    storage_retry_backoff_seconds: float = 0.1

    # Server
    host: str = "127.0.0.1"
    port: int = 8000


def get_settings() -> Settings:
    return Settings()
