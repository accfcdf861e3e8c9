"""CORS configuration derived from settings."""

from __future__ import annotations

from config import Settings


def allowed_origins(settings: Settings) -> list[str]:
    """Split the comma separated ``allowed_origins`` setting."""

    return [
        origin.strip()
        for origin in settings.allowed_origins.split(",")
        if origin.strip()
    ]
