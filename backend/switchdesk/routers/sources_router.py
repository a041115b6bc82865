"""Source API routes"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from switchdesk.core.dependencies import get_scene_service
from switchdesk.core.errors import ConflictError
from switchdesk.schemas import SourceCreate
from switchdesk.services import SceneService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sources", tags=["sources"])


@router.get("")
async def list_sources(scenes: SceneService = Depends(get_scene_service)) -> dict[str, Any]:
    return {"success": True, "sources": scenes.list_sources()}


@router.post("")
async def add_source(
    body: SourceCreate,
    scenes: SceneService = Depends(get_scene_service),
) -> dict[str, Any]:
    try:
        source = await scenes.add_source(body)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return {"success": True, "source": source}
