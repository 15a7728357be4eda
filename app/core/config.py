from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    MODE: str = "production"

    # Database
    POSTGRES_INTERNAL_URL: str = "postgresql+asyncpg://billing:billing@db:5432/billing"
    POSTGRES_INTERNAL_URL_SYNC: str = "postgresql+psycopg2://billing:billing@db:5432/billing"
    POSTGRES_EXTERNAL_URL: Optional[str] = None
    POSTGRES_EXTERNAL_URL_SYNC: Optional[str] = None

    # Session cookies
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    SESSION_MAX_AGE_DAYS: int = 7

    # Logging / monitoring
    LOG_LEVEL: str = "INFO"
    SENTRY_DSN: Optional[str] = None
    SENTRY_ENVIRONMENT: Optional[str] = None
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1
    ACCESS_LOG_ENABLED: bool = True
    SLOW_REQUEST_MS: int = 1000

    CORS_ORIGINS: List[str] = ["*"]

    # Billing defaults
    DEFAULT_PRINT_RATE: float = 100


settings = Settings()
