"""Startup environment validation utilities."""

from __future__ import annotations

import logging
import os
from urllib.parse import urlparse

from config import DEFAULT_SECRET_KEY, Settings, get_settings

logger = logging.getLogger("api.config")


def _mask(value: str) -> str:
    """Return a masked representation of ``value`` for logging."""
    if len(value) <= 4:
        return "*" * len(value)
    return value[:2] + "*" * (len(value) - 4) + value[-2:]


def validate_on_boot(settings: Settings | None = None) -> None:
    """Validate the merged settings before the app starts serving.

    Logs masked values for audit and raises :class:`RuntimeError` when the
    configuration is unusable. Production (``APP_ENV=prod``) additionally
    refuses the placeholder secret key and short keys.
    """

    settings = settings or get_settings()
    env = os.getenv("APP_ENV", "dev")

    if not settings.secret_key:
        raise RuntimeError("SECRET_KEY must not be empty")
    if not urlparse(settings.database_url).scheme:
        raise RuntimeError("DATABASE_URL must be a valid URL")

    if env == "prod":
        if settings.secret_key == DEFAULT_SECRET_KEY:
            raise RuntimeError("SECRET_KEY must be changed in prod")
        if len(settings.secret_key) < 32:
            raise RuntimeError("SECRET_KEY must be at least 32 characters long")
    elif settings.secret_key == DEFAULT_SECRET_KEY:
        logger.warning("SECRET_KEY is the development placeholder")

    logger.info("SECRET_KEY=%s", _mask(settings.secret_key))
    logger.info("DATABASE_URL scheme=%s", urlparse(settings.database_url).scheme)
