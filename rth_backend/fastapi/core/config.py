from datetime import timedelta

from pydantic_settings import BaseSettings, SettingsConfigDict

from rth_backend.fastapi.core.utils import parse_duration


class Settings(BaseSettings):
    # Environment mode: 'dev' or 'prod'
    ENV_MODE: str = 'dev'

    # Application settings
    APP_NAME: str = "RTH Bandung API"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Database URL (read from .env file)
    DATABASE_URL: str = ''

    # JWT Authentication settings
    JWT_SECRET: str = ''
    JWT_ALGORITHM: str = 'HS256'
    JWT_EXPIRES_IN: str = '24h'

    # Admin lookup retry (transient store errors only)
    LOOKUP_MAX_ATTEMPTS: int = 3
    LOOKUP_BACKOFF_SECONDS: float = 1.0

    # Seeded when the admins table is empty
    INITIAL_ADMIN_USERNAME: str = 'admin'
    INITIAL_ADMIN_PASSWORD: str = ''

    # Client URL for CORS
    CLIENT_URL: str = 'http://localhost:3000'
    ADDITIONAL_CORS_ORIGINS: str = ''

    model_config = SettingsConfigDict(env_file=".env", extra='ignore')

    @property
    def is_development(self) -> bool:
        return self.ENV_MODE.lower() in ("dev", "development")

    @property
    def DB_URL(self) -> str:
        return self.DATABASE_URL

    @property
    def token_expires_delta(self) -> timedelta:
        return parse_duration(self.JWT_EXPIRES_IN)


class DevSettings(Settings):
    ENV_MODE: str = 'dev'
    LOG_LEVEL: str = 'DEBUG'

    @property
    def DB_URL(self) -> str:
        # Fall back to SQLite when no DATABASE_URL is provided in .env
        return self.DATABASE_URL if self.DATABASE_URL else "sqlite:///./dev.db"


class ProdSettings(Settings):
    ENV_MODE: str = 'prod'

    @property
    def DB_URL(self) -> str:
        if not self.DATABASE_URL:
            raise RuntimeError("DATABASE_URL must be set in production")
        return self.DATABASE_URL


def get_settings(env_mode: str = "dev") -> Settings:
    if env_mode in ("dev", "development"):
        return DevSettings()
    return ProdSettings()
