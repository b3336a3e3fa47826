"""Application configuration for the reflection diary."""

from __future__ import annotations

import os
from datetime import timedelta
from typing import Dict, Type

from dotenv import load_dotenv
from sqlalchemy.engine.url import make_url

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


def _engine_options_from_uri(uri: str) -> dict:
    url = make_url(uri)
    if url.get_backend_name() == "sqlite":
        return {
            "pool_pre_ping": True,
            "connect_args": {"detect_types": 0, "timeout": 30},
        }
    if url.get_backend_name() in {"postgresql", "postgres"}:
        timeout = int(os.environ.get("DB_CONNECT_TIMEOUT_SECONDS", "10"))
        return {"pool_pre_ping": True, "connect_args": {"connect_timeout": timeout}}
    return {"pool_pre_ping": True}


class BaseConfig:
    """Base configuration loaded for all environments."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "reflection-diary-local-secret-change-me")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///data/diary.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options_from_uri(SQLALCHEMY_DATABASE_URI)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    # Full JSON backups are posted in one request.
    MAX_CONTENT_LENGTH = int(os.environ.get("MAX_CONTENT_LENGTH", str(10 * 1024 * 1024)))
    WTF_CSRF_ENABLED = True

    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", SECRET_KEY)
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.environ.get("JWT_ACCESS_HOURS", "24")))

    RATELIMIT_STORAGE_URI = os.environ.get("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_ENABLED = _flag("RATELIMIT_ENABLED", "true")

    DIARY_HOST = os.environ.get("DIARY_HOST", "127.0.0.1")
    DIARY_PORT = int(os.environ.get("DIARY_PORT", "3001"))
    DIARY_DEFAULT_PASSWORD = os.environ.get("DIARY_DEFAULT_PASSWORD", "password")
    DIARY_AUTO_MIGRATE = _flag("DIARY_AUTO_MIGRATE", "true")
    # "insensitive" matches search text with ILIKE, "sensitive" with LIKE.
    ENTRY_SEARCH_MODE = os.environ.get("ENTRY_SEARCH_MODE", "insensitive").lower()

    # Frontend (page server) settings
    DIARY_API_URL = os.environ.get("DIARY_API_URL", f"http://127.0.0.1:{DIARY_PORT}/api")
    DIARY_API_TIMEOUT = float(os.environ.get("DIARY_API_TIMEOUT", "10"))
    DIARY_FRONTEND_PORT = int(os.environ.get("DIARY_FRONTEND_PORT", "5173"))
    DIARY_STATE_DIR = os.environ.get("DIARY_STATE_DIR", "data")

    # Desktop shell settings
    DIARY_DEV_MODE = os.environ.get("DIARY_ENV", "").lower() == "development"
    DIARY_DEV_URL = os.environ.get("DIARY_DEV_URL", "http://localhost:5173")
    DIARY_SERVER_TIMEOUT = float(os.environ.get("DIARY_SERVER_TIMEOUT", "3"))


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    ENV = "development"


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL", "sqlite://")
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options_from_uri(SQLALCHEMY_DATABASE_URI)
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    DIARY_AUTO_MIGRATE = False
    BCRYPT_LOG_ROUNDS = 4
    ENTRY_SEARCH_MODE = "insensitive"


class ProductionConfig(BaseConfig):
    ENV = "production"


config_by_name: Dict[str, Type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    # CI pipelines set APP_ENV=ci; map to testing defaults.
    "ci": TestingConfig,
}
