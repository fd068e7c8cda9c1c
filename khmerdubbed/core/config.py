# config.py
import os

from dotenv import load_dotenv

# Load .env before any class attribute reads the environment
load_dotenv(override=False)


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Base configuration class"""
    # Scraped site
    KHMERAVE_BASE_URL = os.getenv("KHMERAVE_BASE_URL", "https://www.khmeravenue.com").rstrip("/")
    USER_AGENT = os.getenv(
        "USER_AGENT",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0 Safari/537.36",
    )

    # Addon manifest
    ADDON_ID = os.getenv("ADDON_ID", "community.khmerdubbed")
    ADDON_NAME = os.getenv("ADDON_NAME", "KhmerDubbed")
    ADDON_VERSION = os.getenv("ADDON_VERSION", "1.0.0")
    ID_NAMESPACE = os.getenv("ID_NAMESPACE", "khmerave")
    CATALOG_ID = os.getenv("CATALOG_ID", "khmerave-series")
    CATALOG_NAME = os.getenv("CATALOG_NAME", "KhmerAve")

    # Timeouts (seconds)
    REQUEST_TIMEOUT = _int_env("REQUEST_TIMEOUT", 15)
    CATALOG_TIMEOUT = _int_env("CATALOG_TIMEOUT", 10)

    # In-memory caches (seconds / entries)
    HTML_CACHE_TTL = _int_env("HTML_CACHE_TTL", 600)
    META_CACHE_TTL = _int_env("META_CACHE_TTL", 1800)
    STREAM_CACHE_TTL = _int_env("STREAM_CACHE_TTL", 900)
    NEGATIVE_CACHE_TTL = _int_env("NEGATIVE_CACHE_TTL", 60)
    CACHE_MAX_ENTRIES = _int_env("CACHE_MAX_ENTRIES", 500)

    # Flask-Limiter
    RATELIMIT_DEFAULT = os.getenv("RATELIMIT_DEFAULT", "120 per minute")
    RATELIMIT_ENABLED = _bool_env("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Application settings
    DEBUG = os.getenv("FLASK_ENV") == "development"


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}
