from functools import lru_cache
from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    PROJECT_NAME: str = "Meeting Scheduler API"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "local"
    LOG_LEVEL: str = "INFO"
    # Keep the DB next to the backend directory so every entry point shares one file
    DATABASE_URL: str = "sqlite:///../scheduler.db"
    SECRET_KEY: str = "changeme"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    JWT_ALGORITHM: str = "HS256"
    BCRYPT_ROUNDS: int = 12
    FRONTEND_URL: str = "http://localhost:5173"
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # Scheduling defaults
    DEFAULT_SLOT_MINUTES: int = 30
    DEFAULT_TIME_ZONE: str = "UTC"

    # Rate limiting for the auth endpoints
    RATE_LIMIT_ENABLED: bool = True
    AUTH_RATE_LIMIT: str = "20/minute"

    # 0 disables the request timeout
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, value: List[str] | str) -> List[str]:
        """Allow both comma-separated strings and list inputs."""
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("FRONTEND_URL")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() in ("development", "dev")


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
