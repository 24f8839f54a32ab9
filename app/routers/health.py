import sqlite3

from fastapi import APIRouter, Depends

from app.core.deps import get_app_settings
from app.core.config import Settings
from app.db.migrate import get_schema_version

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness check including database reachability")
async def health(settings: Settings = Depends(get_app_settings)):
    conn = sqlite3.connect(settings.db_path)
    try:
        version = get_schema_version(conn)
    finally:
        conn.close()
    return {"status": "ok", "schemaVersion": version}
