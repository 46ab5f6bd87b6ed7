import pytest

from habitboard.config.settings import DEFAULT_DATABASE_URL, Settings

ENV_KEYS = ("BOT_TOKEN", "DATABASE_URL", "TIMEZONE", "ENVIRONMENT", "LEADERBOARD_CARD_TITLE")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr("habitboard.config.settings.load_dotenv", lambda: False)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_bot_token_is_required():
    with pytest.raises(RuntimeError, match="BOT_TOKEN"):
        Settings.load()


def test_defaults(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", " 123:abc ")
    settings = Settings.load()

    assert settings.bot_token == "123:abc"
    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.timezone == "UTC"
    assert settings.card_title == "Habit Leaderboard"
    assert settings.is_dev is False


def test_overrides(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "t")
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("ENVIRONMENT", "development")
    settings = Settings.load()

    assert settings.database_url == "sqlite+aiosqlite:///:memory:"
    assert settings.timezone == "Europe/Berlin"
    assert settings.is_dev is True


def test_invalid_timezone_fails_fast(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "t")
    monkeypatch.setenv("TIMEZONE", "Mars/Olympus")
    with pytest.raises(RuntimeError, match="TIMEZONE"):
        Settings.load()
