"""Application configuration models."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_RECOMMENDATION_COUNT = 5


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="ReelTrack", alias="APP_NAME")
    server_host: str = Field(default="127.0.0.1", alias="HOST")
    server_port: int = Field(default=8000, alias="PORT")

    data_dir: Path = Field(default=Path("data"), alias="DATA_DIR")
    movies_file: str = Field(default="movies.csv", alias="MOVIES_FILE")
    users_file: str = Field(default="users.csv", alias="USERS_FILE")

    recommendation_count: int = Field(
        default=DEFAULT_RECOMMENDATION_COUNT,
        alias="RECOMMENDATION_COUNT",
        ge=1,
        le=100,
    )

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    environment: Literal["development", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> str:
        """Accept any casing of the standard logging level names."""

        if value is None:
            return "INFO"
        level = str(value).strip().upper()
        if not level:
            return "INFO"
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def movies_path(self) -> Path:
        return self._resolve(self.movies_file)

    @property
    def users_path(self) -> Path:
        return self._resolve(self.users_file)

    def _resolve(self, name: str) -> Path:
        path = Path(name)
        if path.is_absolute():
            return path
        return self.data_dir / path

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


settings = get_settings()
