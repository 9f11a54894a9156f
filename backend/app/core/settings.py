import os


class Settings:
    def __init__(self):
        self.app_name = "Courtside Admin"
        self.api_version = "1.0.0"
        self.environment = os.getenv("COURTSIDE_ENVIRONMENT", "development")
        self.secret_key = os.getenv("COURTSIDE_SECRET_KEY", "CHANGE_ME")
        self.SECRET_KEY = self.secret_key
        self.access_token_expire_minutes = int(os.getenv("COURTSIDE_ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
        self.ACCESS_TOKEN_EXPIRE_MINUTES = self.access_token_expire_minutes
        self.database_url = os.getenv("COURTSIDE_DATABASE_URL", "sqlite:///./courtside.db")
        self.log_level = os.getenv("COURTSIDE_LOG_LEVEL", "INFO").upper()
        # Timestamps are stored in UTC and rendered in this zone.
        self.display_timezone = os.getenv("COURTSIDE_DISPLAY_TIMEZONE", "UTC")
        self.query_cache_ttl_seconds = float(os.getenv("COURTSIDE_QUERY_CACHE_TTL", "30"))
        self.cors_origins = [
            origin.strip()
            for origin in os.getenv("COURTSIDE_CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")
            if origin.strip()
        ]


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
