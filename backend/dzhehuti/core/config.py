"""Application configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed settings exposed via dependency injection throughout the app."""

    # Read .env with BOM tolerance; case-sensitive keys
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=True,
    )

    APP_NAME: str = "Dzhehuti API"
    ENV: str = "dev"  # dev | staging | prod
    DEBUG: bool = False

    # CORS
    CORS_ALLOWED_ORIGINS: list[str] = Field(default_factory=list)

    # DB (calc)
    DB_HOST: str = "127.0.0.1"
    DB_PORT: int = 3306
    DB_USER: str = "admin"
    DB_PASSWORD: str = ""  # set via env/.env
    DB_NAME: str = "calc"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_ISOLATION_LEVEL: str = "READ COMMITTED"
    DB_RETRY_ATTEMPTS: int = 3
    DB_RETRY_BASE_DELAY: float = 0.05
    DB_RETRY_JITTER: float = 0.025

    # Missing params/income/family rows: lenient (zero / no filter) unless strict.
    # Requests may override this per call with the ``strict`` body field.
    STRICT_REFERENCE_LOOKUPS: bool = False

    # Rate limit for the quote and respondent-count endpoints.
    # See dzhehuti.core.rate_limit.limiter for syntax.
    RATE_LIMIT_ENABLED: bool = True
    QUOTE_RATE_LIMIT: str = "60/minute"

    MAX_BODY_BYTES: int = 64 * 1024

    # Logging: JSON lines on stdout unless LOG_JSON is off (local development)
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    @property
    def DATABASE_URL(self) -> str:
        return (
            f"mysql+aiomysql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?charset=utf8mb4"
        )


settings = Settings()
