"""
Service settings loaded from the environment.

Every field can be overridden with a ``BACKTEST_``-prefixed variable, e.g.
``BACKTEST_DATA_DIR=/srv/backtests``.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.constants import DEFAULT_CACHE_SIZE, DEFAULT_EQUITY_JITTER


class Settings(BaseSettings):
    """Backtest API settings."""

    model_config = SettingsConfigDict(
        env_prefix="BACKTEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    data_dir: Path = Field(default=Path("data/backtests"), description="Backtest JSON directory")
    cache_size: int = Field(default=DEFAULT_CACHE_SIZE, gt=0, description="Parsed document cache")
    log_level: str = Field(default="INFO", description="Minimum log level")
    log_json: bool = Field(default=False, description="Emit logs as JSON lines")
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Origins allowed to call the API from a browser",
    )
    enable_demo: bool = Field(default=False, description="Serve a generated 'demo' backtest")
    equity_jitter: float = Field(
        default=DEFAULT_EQUITY_JITTER, ge=0.0, description="Equity series noise amplitude"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()
