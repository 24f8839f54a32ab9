"""Shared FastAPI dependencies.

Settings are read from `app.state` so an application built with a settings
override (tests, temp databases) never touches the cached global settings.
"""

from fastapi import Request

from app.core.config import Settings, get_settings
from app.db.dal import Database


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_db(request: Request) -> Database:
    settings = get_app_settings(request)
    return Database(settings.db_path)
