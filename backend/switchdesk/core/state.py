"""Application state: the single owner of registry, hub, scheduler and services."""

from __future__ import annotations

import asyncio
import logging
import time

from switchdesk.core.config import Settings
from switchdesk.core.scheduler import Scheduler
from switchdesk.realtime.events import EventType, make_event
from switchdesk.realtime.hub import BroadcastHub
from switchdesk.registry import Registry
from switchdesk.registry.seed import initial_scenes, initial_sources
from switchdesk.services import (
    ConfigStore,
    HardwareService,
    RecordingService,
    SceneService,
    StreamService,
    SystemService,
    TransitionService,
)

logger = logging.getLogger(__name__)


class AppState:
    """Explicit replacement for a process-wide server singleton.

    Created per application, stored on ``app.state`` and handed to routers via
    FastAPI dependencies. Every mutation happens on the event loop thread.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.started_at = time.time()
        self.registry = Registry()
        self.hub = BroadcastHub()
        self.scheduler = Scheduler()

        self.config_store = ConfigStore(settings.config_path, self.hub)
        self.hardware = HardwareService(self.registry.devices, self.hub)
        self.streams = StreamService(self.registry.streams, self.hub, self.scheduler, settings)
        self.recordings = RecordingService(
            self.registry.recordings, self.hub, self.scheduler, settings
        )
        self.scenes = SceneService(self.registry.scenes, self.registry.sources, self.hub)
        self.transitions = TransitionService(self.registry.scenes, self.hub, self.scheduler)
        self.system = SystemService(
            self.registry, self.hub, settings, self.started_at, scenes=self.scenes
        )

    def seed(self) -> None:
        for scene in initial_scenes():
            self.registry.scenes.save(scene)
        for source in initial_sources():
            self.registry.sources.save(source)
        logger.info(
            f"Initial data loaded: {len(self.registry.scenes)} scenes, "
            f"{len(self.registry.sources)} sources"
        )

    async def startup(self) -> None:
        logger.info("Initializing switcher state")
        self.config_store.ensure()
        await self.hardware.detect()
        self.seed()

        self.scheduler.spawn(
            self.hub.run_liveness(self.settings.liveness_interval), name="liveness"
        )
        if self.settings.enable_keep_alive:
            self.scheduler.spawn(
                self._heartbeat(self.settings.keep_alive_interval), name="heartbeat"
            )
            logger.info(f"Heartbeat started (interval={self.settings.keep_alive_interval}s)")

    async def _heartbeat(self, interval: int) -> None:
        """Periodic heartbeat: log uptime and resource counts"""
        while True:
            await asyncio.sleep(interval)
            uptime = int(time.time() - self.started_at)
            resources = self.system.resources()
            logger.info(
                f"Heartbeat: uptime={uptime}s, streams={resources['streams']}, "
                f"recordings={resources['recordings']}, clients={resources['clients']}"
            )

    async def shutdown(self) -> None:
        logger.info("Shutting down switcher state")
        await self.hub.broadcast(
            make_event(EventType.SERVER_SHUTDOWN, message="Server is shutting down")
        )
        await self.hub.close_all(code=1001, reason="Server shutting down")
        await self.scheduler.cancel_all()
