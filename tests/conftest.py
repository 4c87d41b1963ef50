import pytest

ENV_VARS = (
    "GAME_THREADS_DEBUG",
    "GAME_THREADS_BOT_TOKEN",
    "GAME_THREADS_CHANNEL",
    "GAME_THREADS_GUILD",
    "GAME_THREADS_API_KEY",
    "GAME_THREADS_API_BASE",
    "GAME_THREADS_LEAGUE",
    "GAME_THREADS_SEASON",
    "GAME_THREADS_STATE_FILE",
    "GAME_THREADS_WEEK1_START",
    "GAME_THREADS_WEEK1_END",
    "GAME_THREADS_IDLE_HOURS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's .env or shell exports out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TZ", "America/New_York")
