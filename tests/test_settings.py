from backend.app.core.settings import Settings, get_settings


def test_settings_defaults():
    settings = get_settings()
    assert settings.app_name == "Courtside Admin"
    assert settings.environment == "development"
    assert isinstance(settings.secret_key, str) and settings.secret_key
    assert isinstance(settings.database_url, str) and settings.database_url
    assert settings.display_timezone == "UTC"
    assert settings.query_cache_ttl_seconds > 0


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("COURTSIDE_LOG_LEVEL", "debug")
    monkeypatch.setenv("COURTSIDE_QUERY_CACHE_TTL", "5")
    monkeypatch.setenv("COURTSIDE_CORS_ORIGINS", "https://admin.example.com, https://coach.example.com")
    settings = Settings()
    assert settings.log_level == "DEBUG"
    assert settings.query_cache_ttl_seconds == 5.0
    assert settings.cors_origins == ["https://admin.example.com", "https://coach.example.com"]


def test_get_settings_is_singleton():
    assert get_settings() is get_settings()
