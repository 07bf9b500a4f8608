"""
Loads environment variables from .env using python-dotenv.

Used throughout the app to configure the database, session tokens,
federated login, the completion service and the RAWG catalog import.
"""

# app/core/config.py
from dotenv import load_dotenv
import os

load_dotenv()


def _as_bool(value, default=False):
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _as_list(value, default):
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    def __init__(self, **overrides):
        self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./gameratings.db")
        self.DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))
        self.DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "0"))
        self.DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "30"))
        self.DB_ECHO = _as_bool(os.getenv("DB_ECHO"))

        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

        self.JWT_SECRET = os.getenv("JWT_SECRET")
        self.JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
        self.JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", "60"))
        self.COOKIE_NAME = os.getenv("COOKIE_NAME", "jwt")
        self.COOKIE_SECURE = _as_bool(os.getenv("COOKIE_SECURE"))

        self.GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID")
        self.GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET")
        self.GOOGLE_REDIRECT_URI = os.getenv(
            "GOOGLE_REDIRECT_URI", "http://localhost:8000/api/auth/google/callback"
        )

        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
        self.OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
        self.OPENAI_MAX_TOKENS = int(os.getenv("OPENAI_MAX_TOKENS", "500"))

        self.RAWG_API_KEY = os.getenv("RAWG_API_KEY")
        self.RAWG_IMPORT_INTERVAL_HOURS = int(os.getenv("RAWG_IMPORT_INTERVAL_HOURS", "24"))

        self.UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
        self.PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:8000")
        self.DEFAULT_PROFILE_PIC = os.getenv(
            "DEFAULT_PROFILE_PIC", "/static/Default-Profile-Picture.jpg"
        )

        self.CORS_ORIGINS = _as_list(
            os.getenv("CORS_ORIGINS"),
            [
                "http://localhost:8000",
                "http://127.0.0.1:8000",
                "http://localhost:3000",
                "http://127.0.0.1:5500",
            ],
        )

        for key, value in overrides.items():
            setattr(self, key, value)


settings = Settings()
