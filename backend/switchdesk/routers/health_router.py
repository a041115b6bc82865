"""Health and status API routes"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from switchdesk.core.dependencies import get_app_state, get_system_service
from switchdesk.core.state import AppState
from switchdesk.services import SystemService

router = APIRouter(prefix="/api", tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime: float
    timestamp: str
    resources: dict[str, int]


@router.get("/health", response_model=HealthResponse)
async def health(system: SystemService = Depends(get_system_service)) -> dict[str, Any]:
    """Liveness check with resource counts"""
    return system.health()


@router.get("/status")
async def status(state: AppState = Depends(get_app_state)) -> dict[str, Any]:
    """Service status, including environment and connected clients"""
    return {
        **state.system.health(),
        "service": state.settings.service_name,
        "environment": state.settings.environment,
        "scheduled_tasks": state.scheduler.pending,
    }
