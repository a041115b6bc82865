"""Stream API routes"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from switchdesk.core.dependencies import get_stream_service
from switchdesk.core.errors import ConflictError, NotFoundError
from switchdesk.schemas import StartStreamRequest
from switchdesk.services import StreamService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["streams"])


@router.get("/streams")
async def list_streams(
    streams: StreamService = Depends(get_stream_service),
) -> dict[str, Any]:
    return {"success": True, "streams": streams.list_streams()}


@router.get("/streams/{stream_id}")
async def get_stream(
    stream_id: str,
    streams: StreamService = Depends(get_stream_service),
) -> dict[str, Any]:
    try:
        stream = streams.get_stream(stream_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return {"success": True, "stream": stream}


@router.post("/stream/start")
async def start_stream(
    body: StartStreamRequest,
    streams: StreamService = Depends(get_stream_service),
) -> dict[str, Any]:
    """Start a stream. It is reported as running once the start delay elapses."""
    stream_id = await streams.start_stream(body.config)
    return {"success": True, "stream_id": stream_id}


@router.post("/stream/stop/{stream_id}")
async def stop_stream(
    stream_id: str,
    streams: StreamService = Depends(get_stream_service),
) -> dict[str, Any]:
    try:
        await streams.stop_stream(stream_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return {"success": True}
