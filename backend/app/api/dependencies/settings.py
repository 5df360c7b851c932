"""Settings dependency for API routes."""

from __future__ import annotations

from app.config import AppSettings, get_settings


def get_app_settings() -> AppSettings:
    """Return the cached settings; tests override this dependency."""

    return get_settings()


__all__ = ["get_app_settings"]
