"""Scene API routes"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from switchdesk.core.dependencies import get_scene_service
from switchdesk.core.errors import NotFoundError
from switchdesk.schemas import SceneCreate, SceneUpdate
from switchdesk.services import SceneService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/scenes", tags=["scenes"])


@router.get("")
async def list_scenes(scenes: SceneService = Depends(get_scene_service)) -> dict[str, Any]:
    return {"success": True, "scenes": scenes.list_scenes()}


@router.get("/{scene_id}")
async def get_scene(
    scene_id: str,
    scenes: SceneService = Depends(get_scene_service),
) -> dict[str, Any]:
    try:
        scene = scenes.get_scene(scene_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return {"success": True, "scene": scene}


@router.post("")
async def save_scene(
    body: SceneCreate,
    scenes: SceneService = Depends(get_scene_service),
) -> dict[str, Any]:
    """Create a scene, or replace the scene named by ``id``"""
    scene = await scenes.save_scene(body)
    return {"success": True, "scene": scene}


@router.put("/{scene_id}")
async def update_scene(
    scene_id: str,
    body: SceneUpdate,
    scenes: SceneService = Depends(get_scene_service),
) -> dict[str, Any]:
    """Merge the given fields into an existing scene"""
    try:
        scene = await scenes.update_scene(scene_id, body)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return {"success": True, "scene": scene}


@router.delete("/{scene_id}")
async def delete_scene(
    scene_id: str,
    scenes: SceneService = Depends(get_scene_service),
) -> dict[str, Any]:
    try:
        await scenes.delete_scene(scene_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return {"success": True}
