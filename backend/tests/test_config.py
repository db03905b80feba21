from shared.config import Settings


def test_default_settings():
    s = Settings()
    assert "postgresql+asyncpg" in s.DATABASE_URL
    assert s.API_PREFIX == "/api"
    assert s.DEFAULT_PASSWORD == "defaultPassword"
    assert s.DEFAULT_ROLE == "user"
    assert s.SEED_DEFAULT_USERS is True


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://test:test@db:5432/testdb")
    monkeypatch.setenv("SEED_DEFAULT_USERS", "false")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    s = Settings()
    assert s.DATABASE_URL == "postgresql+asyncpg://test:test@db:5432/testdb"
    assert s.SEED_DEFAULT_USERS is False
    assert s.LOG_LEVEL == "DEBUG"
