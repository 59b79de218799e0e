from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL
from typing import Optional
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Transaction API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"

    # HTTP listener
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Database
    DB_HOST: str = ""
    DB_USER: str = ""
    DB_PASSWORD: str = ""
    DB_NAME: str = ""
    DB_PORT: int = 5432
    DB_SSLMODE: str = "disable"
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20

    # Readiness probe
    DB_CONNECT_MAX_ATTEMPTS: int = 30
    DB_CONNECT_RETRY_DELAY: float = 1.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    SENTRY_DSN: Optional[str] = None

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def database_url(self) -> URL:
        """Connection descriptor for the asyncpg driver.

        Unset components are left out so the driver applies its own defaults.
        """
        return URL.create(
            "postgresql+asyncpg",
            username=self.DB_USER or None,
            password=self.DB_PASSWORD or None,
            host=self.DB_HOST or None,
            port=self.DB_PORT,
            database=self.DB_NAME or None,
        )

    @property
    def database_connect_args(self) -> dict:
        # asyncpg takes libpq's sslmode names through its ``ssl`` argument
        return {"ssl": self.DB_SSLMODE}


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
