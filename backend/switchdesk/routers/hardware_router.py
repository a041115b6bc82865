"""Hardware API routes"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from switchdesk.core.dependencies import get_hardware_service
from switchdesk.services import HardwareService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/hardware", tags=["hardware"])


@router.get("")
async def list_hardware(
    hardware: HardwareService = Depends(get_hardware_service),
) -> dict[str, Any]:
    devices = hardware.list_devices()
    return {"success": True, "devices": devices, "count": len(devices)}


@router.post("/scan")
async def scan_hardware(
    hardware: HardwareService = Depends(get_hardware_service),
) -> dict[str, Any]:
    """Run a device scan and return the full device list"""
    devices = await hardware.scan()
    return {"success": True, "devices": devices}
