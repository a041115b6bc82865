"""Hardware detection and scanning (simulated)."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import replace

from switchdesk.models import Device
from switchdesk.realtime.events import EventType, make_event
from switchdesk.realtime.hub import BroadcastHub
from switchdesk.registry import InMemoryRepository
from switchdesk.registry.seed import SIMULATED_DEVICES

logger = logging.getLogger(__name__)


def simulated_scan() -> list[Device]:
    """Devices "found" by an on-demand scan."""
    return [
        Device(
            id=f"device_new_{int(time.time() * 1000)}",
            type="usb",
            name="New USB Camera",
            status="detected",
            resolution="1920x1080",
            fps=30,
        )
    ]


class HardwareService:
    def __init__(
        self,
        devices: InMemoryRepository[Device],
        hub: BroadcastHub,
        scanner: Callable[[], list[Device]] = simulated_scan,
    ) -> None:
        self.devices = devices
        self.hub = hub
        self.scanner = scanner

    def list_devices(self) -> list[Device]:
        return self.devices.list_all()

    async def detect(self) -> list[Device]:
        """Startup detection: load the simulated device set."""
        logger.info("Detecting hardware...")
        for device in SIMULATED_DEVICES:
            if device.id not in self.devices:
                self.devices.create(replace(device))
        devices = self.devices.list_all()
        logger.info(f"Hardware detected: {len(devices)} devices")
        await self.hub.broadcast(make_event(EventType.HARDWARE_UPDATED, devices=devices))
        return devices

    async def scan(self) -> list[Device]:
        """Add newly found devices (idempotent on id) and return the full list."""
        logger.info("Scanning for hardware...")
        for device in self.scanner():
            if device.id not in self.devices:
                self.devices.create(device)
        devices = self.devices.list_all()
        await self.hub.broadcast(make_event(EventType.HARDWARE_SCANNED, devices=devices))
        logger.info(f"Hardware scan complete: {len(devices)} devices")
        return devices
