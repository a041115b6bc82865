"""Settings document API routes"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from switchdesk.core.dependencies import get_config_store
from switchdesk.core.errors import ConfigStoreError
from switchdesk.schemas import ConfigDocument
from switchdesk.services import ConfigStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/config", tags=["config"])


@router.get("")
async def get_config(store: ConfigStore = Depends(get_config_store)) -> dict[str, Any]:
    return {"success": True, "config": store.current.model_dump()}


@router.post("")
async def save_config(
    body: ConfigDocument,
    store: ConfigStore = Depends(get_config_store),
) -> dict[str, Any]:
    """Replace the whole settings document"""
    try:
        await store.save(body)
    except ConfigStoreError as e:
        logger.error(f"Config save failed: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e
    return {"success": True}
