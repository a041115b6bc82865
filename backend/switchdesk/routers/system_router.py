"""System API routes"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from switchdesk.core.dependencies import get_system_service
from switchdesk.services import SystemService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/system", tags=["system"])


@router.get("/stats")
async def system_stats(system: SystemService = Depends(get_system_service)) -> dict[str, Any]:
    return {"success": True, "stats": system.stats()}


@router.post("/restart")
async def restart_system(system: SystemService = Depends(get_system_service)) -> dict[str, Any]:
    await system.restart()
    return {"success": True, "message": "System restart initiated"}
