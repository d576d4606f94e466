from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    # Empty env values fall back to defaults, same as an unset variable.
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_ignore_empty=True)

    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, ge=1, le=65535, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    ready_after_seconds: float = Field(default=5.0, ge=0, alias="READY_AFTER_SECONDS")
    min_delay_ms: int = Field(default=1000, ge=0, alias="MIN_DELAY_MS")
    max_delay_ms: int = Field(default=5000, alias="MAX_DELAY_MS")
    workload_threads: int = Field(default=1000, ge=1, alias="WORKLOAD_THREADS")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}")
        return level

    @model_validator(mode="after")
    def _check_delay_range(self) -> "Settings":
        if self.max_delay_ms <= self.min_delay_ms:
            raise ValueError("MAX_DELAY_MS must be greater than MIN_DELAY_MS")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
