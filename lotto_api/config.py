"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Upstream (dhlottery.co.kr)
    LOTTO_BASIC_URL: str = os.getenv("LOTTO_BASIC_URL", "https://www.dhlottery.co.kr/common.do")
    LOTTO_DETAIL_URL: str = os.getenv("LOTTO_DETAIL_URL", "https://www.dhlottery.co.kr/gameResult.do")
    LOTTO_HTTP_TIMEOUT: float = _env_float("LOTTO_HTTP_TIMEOUT", 10.0)
    LOTTO_HTTP_RETRIES: int = _env_int("LOTTO_HTTP_RETRIES", 0)
    LOTTO_HTTP_BACKOFF: float = _env_float("LOTTO_HTTP_BACKOFF", 0.3)

    # How many earlier draws to try when "latest" is not published yet.
    LOTTO_LATEST_LOOKBACK: int = _env_int("LOTTO_LATEST_LOOKBACK", 2)
    LOTTO_STATS_WORKERS: int = _env_int("LOTTO_STATS_WORKERS", 10)


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


@dataclass(frozen=True)
class TestingConfig(BaseConfig):
    """Configuration used by the test suite."""

    DEBUG: bool = False
    TESTING: bool = True
    LOG_LEVEL: str = "WARNING"


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
