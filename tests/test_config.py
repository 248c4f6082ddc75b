"""Tests for environment-driven settings."""
import pytest

from sweetshop.core import config as config_module
from sweetshop.core.config import StorageConfig, load_settings
from sweetshop.core.exceptions import ConfigurationException

ENV_KEYS = (
    "SWEETSHOP_API_URL",
    "SWEETSHOP_API_TIMEOUT",
    "REDIS_URL",
    "SWEETSHOP_STORAGE_PREFIX",
    "SWEETSHOP_CLIENT_ID",
    "SWEETSHOP_FREE_SHIPPING_THRESHOLD",
    "SWEETSHOP_SHIPPING_FEE",
    "SWEETSHOP_NOTIFICATION_WINDOW",
    "SWEETSHOP_LANGUAGE",
    "SWEETSHOP_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr(config_module, "load_dotenv", lambda: None)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults():
    settings = load_settings()

    assert settings.api_url == "http://localhost:3001"
    assert settings.api_timeout == 30
    assert settings.notification_window == 3.0
    assert settings.language == "es"
    assert settings.pricing.free_shipping_threshold == 8000
    assert settings.pricing.shipping_fee == 5000
    assert settings.storage.redis_url is None
    assert settings.storage.namespace == "sweetshop:default:"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SWEETSHOP_API_URL", "https://api.dulceria.test/")
    monkeypatch.setenv("SWEETSHOP_FREE_SHIPPING_THRESHOLD", "12000")
    monkeypatch.setenv("SWEETSHOP_SHIPPING_FEE", " 3500 ")
    monkeypatch.setenv("SWEETSHOP_NOTIFICATION_WINDOW", "1.5")
    monkeypatch.setenv("SWEETSHOP_CLIENT_ID", "tab-42")
    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")
    monkeypatch.setenv("SWEETSHOP_LANGUAGE", "en")

    settings = load_settings()

    assert settings.api_url == "https://api.dulceria.test"
    assert settings.pricing.free_shipping_threshold == 12000
    assert settings.pricing.shipping_fee == 3500
    assert settings.notification_window == 1.5
    assert settings.storage.redis_url == "redis://localhost:6379/0"
    assert settings.storage.namespace == "sweetshop:tab-42:"
    assert settings.language == "en"


def test_blank_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("SWEETSHOP_SHIPPING_FEE", "   ")
    monkeypatch.setenv("SWEETSHOP_CLIENT_ID", "")

    settings = load_settings()

    assert settings.pricing.shipping_fee == 5000
    assert settings.storage.client_id == "default"


@pytest.mark.parametrize(
    "key, value",
    [
        ("SWEETSHOP_SHIPPING_FEE", "five thousand"),
        ("SWEETSHOP_FREE_SHIPPING_THRESHOLD", "-1"),
        ("SWEETSHOP_NOTIFICATION_WINDOW", "-0.5"),
        ("SWEETSHOP_API_TIMEOUT", "0"),
    ],
)
def test_invalid_values_raise(monkeypatch, key, value):
    monkeypatch.setenv(key, value)

    with pytest.raises(ConfigurationException) as exc_info:
        load_settings()

    assert key in exc_info.value.message


def test_storage_namespace():
    assert StorageConfig(prefix="shop:", client_id="abc").namespace == "shop:abc:"
