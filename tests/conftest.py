"""
Pytest configuration and fixtures.
"""
import pytest

import app_service.core.config as config_module
import app_service.di.container as container_module


@pytest.fixture(autouse=True)
def reset_singletons():
    """Each test starts without a global composition root or cached settings."""
    container_module._container = None
    config_module._settings = None
    yield
    container_module._container = None
    config_module._settings = None


@pytest.fixture
def clean_env(monkeypatch):
    """Remove service configuration variables from the environment."""
    for name in (
        "APP_NAME",
        "APP_VERSION",
        "SCAN_NAMESPACES",
        "SCAN_PATTERN",
        "ENFORCE_LAYERS",
        "HOST",
        "PORT",
        "LOG_LEVEL",
        "CORS_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's local .env out of the tests
    monkeypatch.setattr(config_module, "load_dotenv", lambda *args, **kwargs: False)
    return monkeypatch
