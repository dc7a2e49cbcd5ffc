import pytest

from DayLog.config import Settings


@pytest.fixture
def settings(monkeypatch):
    # Keep the developer's shell / .env out of the tests.
    for var in ("GEMINI_API_KEY", "DAYLOG_API_KEY", "DAYLOG_PROVIDER", "DAYLOG_ADD_HEADER"):
        monkeypatch.delenv(var, raising=False)
    return Settings(_env_file=None)


@pytest.fixture
def remote_settings(settings):
    settings.provider = "remote"
    settings.api_key = "test-key"
    return settings
