"""Scene and source CRUD."""

from __future__ import annotations

import logging

from switchdesk.models import Scene, SceneSource, Source, SourceSettings
from switchdesk.realtime.events import EventType, make_event
from switchdesk.realtime.hub import BroadcastHub
from switchdesk.registry import InMemoryRepository
from switchdesk.schemas import SceneCreate, SceneSourceIn, SceneUpdate, SourceCreate

logger = logging.getLogger(__name__)


def _to_scene_sources(items: list[SceneSourceIn]) -> list[SceneSource]:
    return [SceneSource(**item.model_dump()) for item in items]


class SceneService:
    def __init__(
        self,
        scenes: InMemoryRepository[Scene],
        sources: InMemoryRepository[Source],
        hub: BroadcastHub,
    ) -> None:
        self.scenes = scenes
        self.sources = sources
        self.hub = hub
        self.program_scene_id: str | None = None
        self.preview_scene_id: str | None = None

    # --- scenes ---

    def list_scenes(self) -> list[Scene]:
        return self.scenes.list_all()

    def get_scene(self, scene_id: str) -> Scene:
        return self.scenes.get(scene_id)

    async def save_scene(self, data: SceneCreate) -> Scene:
        """Create, or replace when ``data.id`` names an existing scene."""
        scene = self.scenes.save(
            Scene(
                id=data.id or "",
                name=data.name,
                description=data.description,
                layout=data.layout,
                sources=_to_scene_sources(data.sources),
                transitions=list(data.transitions),
                created_at=data.created_at,
            )
        )
        await self.hub.broadcast(make_event(EventType.SCENE_SAVED, scene=scene))
        logger.info(f"Scene saved: {scene.id}")
        return scene

    async def update_scene(self, scene_id: str, updates: SceneUpdate) -> Scene:
        """Merge the fields present in ``updates``; every other field is kept."""
        changes = {
            key: value
            for key, value in updates.model_dump(exclude_unset=True).items()
            if value is not None
        }
        if "sources" in changes:
            changes["sources"] = _to_scene_sources(updates.sources or [])
        scene = self.scenes.update(scene_id, **changes)
        await self.hub.broadcast(
            make_event(EventType.SCENE_UPDATED, scene_id=scene_id, scene=scene)
        )
        logger.info(f"Scene updated: {scene_id}")
        return scene

    async def delete_scene(self, scene_id: str) -> None:
        # Sources referenced by the scene are left alone
        self.scenes.delete(scene_id)
        if self.program_scene_id == scene_id:
            self.program_scene_id = None
        if self.preview_scene_id == scene_id:
            self.preview_scene_id = None
        await self.hub.broadcast(make_event(EventType.SCENE_DELETED, scene_id=scene_id))
        logger.info(f"Scene deleted: {scene_id}")

    async def set_scene(self, scene_id: str, target: str = "program") -> str | None:
        """Put an existing scene on program or preview. Returns the scene it replaced."""
        self.scenes.get(scene_id)
        if target == "preview":
            previous, self.preview_scene_id = self.preview_scene_id, scene_id
        else:
            previous, self.program_scene_id = self.program_scene_id, scene_id
        await self.hub.broadcast(
            make_event(EventType.SCENE_CHANGED, scene_id=scene_id, target=target, previous=previous)
        )
        logger.info(f"Scene on {target}: {scene_id}")
        return previous

    # --- sources ---

    def list_sources(self) -> list[Source]:
        return self.sources.list_all()

    async def add_source(self, data: SourceCreate) -> Source:
        source = self.sources.create(
            Source(
                id=data.id or "",
                name=data.name,
                type=data.type,
                device_id=data.device_id,
                device_port=data.device_port,
                settings=SourceSettings(**data.settings.model_dump()),
                status=data.status,
            )
        )
        await self.hub.broadcast(make_event(EventType.SOURCE_ADDED, source=source))
        logger.info(f"Source added: {source.id}")
        return source
