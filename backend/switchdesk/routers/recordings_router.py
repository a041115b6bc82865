"""Recording API routes"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from switchdesk.core.dependencies import get_recording_service
from switchdesk.core.errors import ConflictError, NotFoundError
from switchdesk.schemas import StartRecordingRequest
from switchdesk.services import RecordingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["recordings"])


@router.get("/recordings")
async def list_recordings(
    recordings: RecordingService = Depends(get_recording_service),
) -> dict[str, Any]:
    return {"success": True, "recordings": recordings.list_recordings()}


@router.get("/recordings/{record_id}")
async def get_recording(
    record_id: str,
    recordings: RecordingService = Depends(get_recording_service),
) -> dict[str, Any]:
    try:
        recording = recordings.get_recording(record_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return {"success": True, "recording": recording}


@router.post("/record/start")
async def start_recording(
    body: StartRecordingRequest,
    recordings: RecordingService = Depends(get_recording_service),
) -> dict[str, Any]:
    record_id = await recordings.start_recording(body.config)
    return {"success": True, "record_id": record_id}


@router.post("/record/stop/{record_id}")
async def stop_recording(
    record_id: str,
    recordings: RecordingService = Depends(get_recording_service),
) -> dict[str, Any]:
    """Stop a recording and return its final file info"""
    try:
        recording = await recordings.stop_recording(record_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return {"success": True, "recording": recording}
