"""Tests for Settings env mapping."""

from tsm.config import Settings


def test_defaults(monkeypatch):
    for name in ("DATABASE_URL", "DEFAULT_PER_PAGE", "MAX_PER_PAGE", "STATEMENT_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.default_per_page == 20
    assert s.max_per_page == 100
    assert s.statement_timeout_seconds is None
    assert s.database_url.startswith("postgresql+asyncpg://")


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DEFAULT_PER_PAGE", "50")
    monkeypatch.setenv("STATEMENT_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite://")
    s = Settings(_env_file=None)
    assert s.default_per_page == 50
    assert s.statement_timeout_seconds == 2.5
    assert s.database_url == "sqlite+aiosqlite://"
