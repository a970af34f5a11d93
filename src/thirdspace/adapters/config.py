# src/thirdspace/adapters/config.py
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # persistence
    DB_URI: str = Field(default="sqlite:///thirdspace.db")
    MODELS_LIST_LIMIT: int = Field(default=500)

    # HTTP
    CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["*"])

    # Report export
    REPORT_DIR: str = Field(default="data/reports")

    model_config = SettingsConfigDict(
        env_prefix="THIRDSPACE_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("DB_URI", mode="before")
    @classmethod
    def _normalize_db_uri(cls, v: Any) -> Any:
        # Hosted Postgres hands out postgres://, SQLAlchemy wants postgresql://
        if isinstance(v, str) and v.startswith("postgres://"):
            return "postgresql://" + v[len("postgres://"):]
        return v

    @field_validator("MODELS_LIST_LIMIT", mode="before")
    @classmethod
    def _limit_positive(cls, v: Any) -> Any:
        n = int(v)
        if n <= 0:
            raise ValueError("MODELS_LIST_LIMIT must be > 0")
        return n


config = AppConfig()
