"""Transition API routes"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from switchdesk.core.dependencies import get_transition_service
from switchdesk.core.errors import NotFoundError
from switchdesk.schemas import TransitionRequest
from switchdesk.services import TransitionService

router = APIRouter(prefix="/api/transition", tags=["transitions"])


@router.post("")
async def perform_transition(
    body: TransitionRequest,
    transitions: TransitionService = Depends(get_transition_service),
) -> dict[str, Any]:
    """Start a transition; completion is announced on the channel"""
    try:
        transition = await transitions.perform_transition(body)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return {"success": True, "transition": transition}
