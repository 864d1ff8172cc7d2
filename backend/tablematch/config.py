"""Application configuration."""
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "TableMatch"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Storage
    users_file: Path = Path("./data/users.json")

    # Accounts
    bcrypt_rounds: int = 10
    min_password_length: int = 8
    default_min_rating: float = 3.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, value: int) -> int:
        """bcrypt only accepts cost factors between 4 and 31."""
        if not 4 <= value <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31.")
        return value

    @field_validator("min_password_length")
    @classmethod
    def validate_min_password_length(cls, value: int) -> int:
        if value < 1:
            raise ValueError("MIN_PASSWORD_LENGTH must be at least 1.")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got {value!r}.")
        return level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
