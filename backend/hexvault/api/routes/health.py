"""Health & Readiness — liveness and readiness endpoints of the vault API.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 unless the users table can be read (readiness)
    - Health routes sit outside the api prefix and answer JSON, not text/plain
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import hexvault.infrastructure.database as database

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": "hexvault-api"}


@router.get("/ready")
async def readiness_check():
    """Ready once the database answers and the users table exists."""
    manager = database.db_manager
    users_ok = await manager.users_table_readable() if manager else False
    if not users_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "users_table_unavailable"},
        )
    return {"status": "ready", "checks": {"users_table": "readable"}}
