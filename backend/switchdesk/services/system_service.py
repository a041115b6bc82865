"""Health, process statistics and restart."""

from __future__ import annotations

import logging
import platform
import time
from typing import Any

import psutil

from switchdesk.core.config import Settings
from switchdesk.realtime.events import EventType, make_event
from switchdesk.realtime.hub import BroadcastHub
from switchdesk.registry import Registry, utcnow
from switchdesk.services.scene_service import SceneService

logger = logging.getLogger(__name__)


def _megabytes(value: int) -> str:
    return f"{round(value / 1024 / 1024)} MB"


class SystemService:
    def __init__(
        self,
        registry: Registry,
        hub: BroadcastHub,
        settings: Settings,
        started_at: float | None = None,
        scenes: SceneService | None = None,
    ) -> None:
        self.registry = registry
        self.hub = hub
        self.settings = settings
        self.scenes = scenes
        self.started_at = started_at if started_at is not None else time.time()
        self._process = psutil.Process()

    @property
    def uptime(self) -> float:
        return time.time() - self.started_at

    def resources(self) -> dict[str, int]:
        return {**self.registry.counts(), "clients": len(self.hub)}

    def health(self) -> dict[str, Any]:
        return {
            "status": "healthy",
            "version": self.settings.version,
            "uptime": self.uptime,
            "timestamp": utcnow().isoformat(),
            "resources": self.resources(),
        }

    def stats(self) -> dict[str, Any]:
        memory = self._process.memory_info()
        cpu = self._process.cpu_times()
        return {
            "system": {
                "python_version": platform.python_version(),
                "platform": platform.system().lower(),
                "arch": platform.machine(),
                "uptime": int(self.uptime),
            },
            "memory": {
                "rss": _megabytes(memory.rss),
                "vms": _megabytes(memory.vms),
                "system_percent": psutil.virtual_memory().percent,
            },
            "resources": self.resources(),
            "scenes": self.on_air(),
            "performance": {
                "cpu_user": cpu.user,
                "cpu_system": cpu.system,
                "timestamp": utcnow().isoformat(),
            },
        }

    def snapshot(self) -> dict[str, Any]:
        """Short summary sent in the welcome message."""
        return {
            "version": self.settings.version,
            "streams": len(self.registry.streams),
            "scenes": len(self.registry.scenes),
            **self.on_air(),
        }

    def on_air(self) -> dict[str, str | None]:
        if self.scenes is None:
            return {"program_scene": None, "preview_scene": None}
        return {
            "program_scene": self.scenes.program_scene_id,
            "preview_scene": self.scenes.preview_scene_id,
        }

    async def restart(self) -> None:
        """Drop live sessions and every client; scenes, sources and devices survive."""
        logger.warning("Restarting system...")
        await self.hub.broadcast(
            make_event(EventType.SYSTEM_RESTARTING, message="System restart initiated")
        )
        await self.hub.close_all(code=1001, reason="Server restarting")
        # Simulators see their entity disappear on the next tick and exit
        self.registry.streams.clear()
        self.registry.recordings.clear()
        logger.info("System restart complete")
