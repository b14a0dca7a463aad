"""Application configuration loaded from environment variables."""
from pydantic_settings import BaseSettings, SettingsConfigDict

# Values shipped in example .env files; treated as "not configured"
_PLACEHOLDER_MARKERS = ("your-project", "your_project", "changeme", "placeholder", "example.com")
_SUPPORTED_DRIVERS = ("postgresql+asyncpg://", "sqlite+aiosqlite://")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    APP_NAME: str = "Tepi API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database (empty -> demo mode with static sample data)
    DATABASE_URL: str = ""
    DB_CONNECT_TIMEOUT: int = 10

    # JWT (tokens are issued by the hosted auth service; we only read `sub`)
    JWT_SECRET_KEY: str = "2rt2UV4drlLb_s_a92hOjZPa-LwiVT4Zzfe01WuyvWE"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Feed
    FEED_BATCHED_ENRICHMENT: bool = False
    DEMO_USER_ID: str = "demo-user-123"
    FEED_STATE_MAX_VIEWERS: int = 1000


def has_valid_backend_config(settings: "Settings") -> bool:
    """True when DATABASE_URL points at a real store we can talk to."""
    url = (settings.DATABASE_URL or "").strip()
    if not url:
        return False
    if any(marker in url for marker in _PLACEHOLDER_MARKERS):
        return False
    return url.startswith(_SUPPORTED_DRIVERS)


settings = Settings()
