"""
CONFIGURATION - TOTP VERIFICATION SERVER

Settings are read from environment variables (a .env file is loaded first).

    TOTP_ENV              development | production | testing
    TOTP_ALLOWED_ORIGIN   CORS origin allowed in production
    TOTP_HOST / TOTP_PORT listen address of the development server
    TOTP_ISSUER           issuer written into otpauth:// URIs
    TOTP_ACCOUNT          default account label for otpauth:// URIs
    TOTP_WINDOW_RADIUS    verification window (0 = current step only)
    LOG_LEVEL             logging level name
"""

import logging
import os

from dotenv import load_dotenv

from totp_core.provisioning import DEFAULT_ACCOUNT, DEFAULT_ISSUER

logger = logging.getLogger(__name__)

load_dotenv()


def _env_int(key: str, default: int) -> int:
    raw = os.environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer, using %s", key, raw, default)
        return default


class Config:
    APP_ENV = os.environ.get("TOTP_ENV", "development")
    TESTING = False

    HOST = os.environ.get("TOTP_HOST", "0.0.0.0")
    PORT = _env_int("TOTP_PORT", 3001)

    # None = every origin (development only)
    ALLOWED_ORIGIN = None

    ISSUER = os.environ.get("TOTP_ISSUER", DEFAULT_ISSUER)
    ACCOUNT = os.environ.get("TOTP_ACCOUNT", DEFAULT_ACCOUNT)
    WINDOW_RADIUS = _env_int("TOTP_WINDOW_RADIUS", 0)

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


class DevelopmentConfig(Config):
    APP_ENV = "development"


class ProductionConfig(Config):
    APP_ENV = "production"
    ALLOWED_ORIGIN = os.environ.get("TOTP_ALLOWED_ORIGIN", "http://localhost:5173")


class TestingConfig(Config):
    APP_ENV = "testing"
    TESTING = True
    LOG_LEVEL = "DEBUG"


CONFIGS = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config(name: str = None):
    """Config class for `name` (default: $TOTP_ENV), falling back to development."""
    if name is None:
        name = os.environ.get("TOTP_ENV", "development")
    return CONFIGS.get(name.strip().lower(), DevelopmentConfig)
