"""Environment-driven configuration objects for the storefront client."""
from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .constants import (
    API_TIMEOUT_SECONDS,
    DEFAULT_API_URL,
    DEFAULT_CLIENT_ID,
    DEFAULT_LANGUAGE,
    DEFAULT_STORAGE_PREFIX,
    FLAT_SHIPPING_FEE,
    FREE_SHIPPING_THRESHOLD,
    NOTIFICATION_WINDOW_SECONDS,
)
from .exceptions import ConfigurationException


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_float(key: str, default: float) -> float:
    raw = _get_env(key)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationException(f"{key} must be a number, got {raw!r}") from exc
    if value < 0:
        raise ConfigurationException(f"{key} must not be negative, got {raw!r}")
    return value


@dataclass(slots=True)
class PricingConfig:
    free_shipping_threshold: float = FREE_SHIPPING_THRESHOLD
    shipping_fee: float = FLAT_SHIPPING_FEE


@dataclass(slots=True)
class StorageConfig:
    redis_url: str | None = None
    prefix: str = DEFAULT_STORAGE_PREFIX
    client_id: str = DEFAULT_CLIENT_ID

    @property
    def namespace(self) -> str:
        """Key prefix owned by one browser session."""
        return f"{self.prefix}{self.client_id}:"


@dataclass(slots=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    api_timeout: float = API_TIMEOUT_SECONDS
    notification_window: float = NOTIFICATION_WINDOW_SECONDS
    language: str = DEFAULT_LANGUAGE
    log_level: str = "INFO"
    pricing: PricingConfig = field(default_factory=PricingConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)


def load_settings() -> Settings:
    """Load environment variables once and expose typed settings."""
    load_dotenv()

    pricing = PricingConfig(
        free_shipping_threshold=_get_float(
            "SWEETSHOP_FREE_SHIPPING_THRESHOLD", FREE_SHIPPING_THRESHOLD
        ),
        shipping_fee=_get_float("SWEETSHOP_SHIPPING_FEE", FLAT_SHIPPING_FEE),
    )
    storage = StorageConfig(
        redis_url=_get_env("REDIS_URL"),
        prefix=_get_env("SWEETSHOP_STORAGE_PREFIX", default=DEFAULT_STORAGE_PREFIX)
        or DEFAULT_STORAGE_PREFIX,
        client_id=_get_env("SWEETSHOP_CLIENT_ID", default=DEFAULT_CLIENT_ID) or DEFAULT_CLIENT_ID,
    )

    api_timeout = _get_float("SWEETSHOP_API_TIMEOUT", API_TIMEOUT_SECONDS)
    if api_timeout == 0:
        raise ConfigurationException("SWEETSHOP_API_TIMEOUT must be greater than zero")

    return Settings(
        api_url=(_get_env("SWEETSHOP_API_URL", default=DEFAULT_API_URL) or DEFAULT_API_URL).rstrip(
            "/"
        ),
        api_timeout=api_timeout,
        notification_window=_get_float("SWEETSHOP_NOTIFICATION_WINDOW", NOTIFICATION_WINDOW_SECONDS),
        language=_get_env("SWEETSHOP_LANGUAGE", default=DEFAULT_LANGUAGE) or DEFAULT_LANGUAGE,
        log_level=_get_env("SWEETSHOP_LOG_LEVEL", default="INFO") or "INFO",
        pricing=pricing,
        storage=storage,
    )
