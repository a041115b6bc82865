"""Scene transitions (simulated: two events separated by the duration)."""

from __future__ import annotations

import logging
from typing import Any

from switchdesk.core.scheduler import Scheduler
from switchdesk.models import Scene
from switchdesk.realtime.events import EventType, make_event
from switchdesk.realtime.hub import BroadcastHub
from switchdesk.registry import InMemoryRepository, generate_id, utcnow
from switchdesk.schemas import TransitionRequest

logger = logging.getLogger(__name__)


class TransitionService:
    def __init__(
        self,
        scenes: InMemoryRepository[Scene],
        hub: BroadcastHub,
        scheduler: Scheduler,
    ) -> None:
        self.scenes = scenes
        self.hub = hub
        self.scheduler = scheduler

    async def perform_transition(self, request: TransitionRequest) -> dict[str, Any]:
        """Emit ``transition_started`` now and ``transition_completed`` after the duration.

        Both scenes must exist; NotFoundError is raised before any event.
        """
        self.scenes.get(request.from_scene)
        self.scenes.get(request.to_scene)

        transition = {
            "transition_id": generate_id("transition"),
            "type": request.type,
            "from_scene": request.from_scene,
            "to_scene": request.to_scene,
            "duration": request.duration,
            "started_at": utcnow().isoformat(),
        }
        logger.info(
            f"Performing transition: {request.type} from {request.from_scene} to {request.to_scene}"
        )
        await self.hub.broadcast(make_event(EventType.TRANSITION_STARTED, transition=transition))

        self.scheduler.call_later(
            request.duration / 1000,
            lambda: self._complete(transition),
            name=f"transition-{transition['transition_id']}",
        )
        return transition

    async def _complete(self, transition: dict[str, Any]) -> None:
        completed = {**transition, "completed_at": utcnow().isoformat()}
        await self.hub.broadcast(make_event(EventType.TRANSITION_COMPLETED, transition=completed))
        logger.info(f"Transition completed: {transition['type']}")
