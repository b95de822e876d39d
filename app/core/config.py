import json
import os
from typing import List, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Runtime configuration.

    Values come from the process environment first, then from
    ``config/<ENV>.env`` (``ENV`` defaults to ``local``).
    """

    # Service
    environment: str = "local"
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"
    # JSON array or comma-separated list
    cors_origins: Union[List[str], str] = ["*"]

    # Database
    database_url: str
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_schema: str = "public"

    # Tokens and passwords
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = Field(default=30, gt=0)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Product listing
    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=100, ge=1)

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("cors_origins")
    @classmethod
    def split_cors_origins(cls, value: Union[List[str], str]) -> List[str]:
        if isinstance(value, list):
            return value
        try:
            parsed = json.loads(value)
        except ValueError:
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return parsed if isinstance(parsed, list) else [str(parsed)]

    @property
    def docs_enabled(self) -> bool:
        return self.environment == "local"

    class Config:
        env_file = f"config/{os.getenv('ENV', 'local')}.env"
        case_sensitive = False


settings = Settings()
