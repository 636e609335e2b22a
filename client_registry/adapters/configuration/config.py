# client_registry/adapters/configuration/config.py

from typing import Optional
from logging import getLevelName
from pydantic import PostgresDsn, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"

    # Environment
    ENVIRONMENT: str = "development"  # "development", "production", "testing"

    # Database
    DB_DRIVER: str = "asyncpg"
    POSTGRES_USER: str
    POSTGRES_PASSWORD: str
    POSTGRES_DB: str
    POSTGRES_HOST: str
    POSTGRES_PORT: int
    TEST_MODE: bool = False
    TEST_POSTGRES_DB: str = ""
    DATABASE_URL: Optional[str] = None

    DEBUG: bool = False

    # API
    API_PREFIX: str = "/api"

    # API access tokens
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    API_AUTH_ENABLED: bool = True
    API_SCOPE: str = "auth_api"

    # Client secrets (bcrypt cost factor)
    CLIENT_SECRET_HASH_ROUNDS: int = 12

    @field_validator("DATABASE_URL", mode="before")
    def assemble_db_url(cls, value, info):
        if value:
            return value

        data = info.data
        db_name = data.get("TEST_POSTGRES_DB") if data.get("TEST_MODE") else data.get("POSTGRES_DB")
        return str(PostgresDsn.build(
            scheme=f"postgresql+{data.get('DB_DRIVER', 'asyncpg')}",
            username=data["POSTGRES_USER"],
            password=data["POSTGRES_PASSWORD"],
            host=data["POSTGRES_HOST"],
            port=data["POSTGRES_PORT"],
            path=db_name,
        ))

    @field_validator("LOG_LEVEL", mode="before")
    def validate_log_level(cls, v: str) -> str:
        """Ensures the value is a valid logging level name."""
        lvl = v.upper()
        if not isinstance(getLevelName(lvl), int):
            raise ValueError(f"Invalid LOG_LEVEL: {v!r}")
        return lvl

    @field_validator("API_PREFIX", mode="before")
    def normalize_api_prefix(cls, v: str) -> str:
        return "/" + v.strip("/") if v.strip("/") else ""

    @field_validator("CLIENT_SECRET_HASH_ROUNDS")
    def validate_hash_rounds(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError(f"CLIENT_SECRET_HASH_ROUNDS must be between 4 and 31, got {v}")
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
