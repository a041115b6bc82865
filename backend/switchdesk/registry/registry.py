"""Registry: the authoritative in-memory state for every entity kind."""

from __future__ import annotations

from switchdesk.models import Device, Recording, Scene, Source, Stream
from switchdesk.registry.repository import InMemoryRepository


class Registry:
    """One repository per entity kind.

    Owned by the application state and mutated only from event-loop callbacks.
    """

    def __init__(self) -> None:
        self.devices: InMemoryRepository[Device] = InMemoryRepository("device", "device")
        self.scenes: InMemoryRepository[Scene] = InMemoryRepository("scene", "scene")
        self.sources: InMemoryRepository[Source] = InMemoryRepository("source", "source")
        self.streams: InMemoryRepository[Stream] = InMemoryRepository("stream", "stream")
        self.recordings: InMemoryRepository[Recording] = InMemoryRepository(
            "recording", "record"
        )

    def counts(self) -> dict[str, int]:
        return {
            "streams": len(self.streams),
            "recordings": len(self.recordings),
            "scenes": len(self.scenes),
            "sources": len(self.sources),
            "hardware": len(self.devices),
        }
