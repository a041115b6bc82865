"""Scene models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class SceneSource:
    """Placement of a source inside a scene.

    Video references use x/y/width/height, audio references use volume/muted.
    """

    id: str
    type: str = "video"
    x: int | None = None
    y: int | None = None
    width: int | None = None
    height: int | None = None
    volume: float | None = None
    muted: bool | None = None


@dataclass
class Scene:
    id: str
    name: str
    description: str = ""
    layout: str = "fullscreen"
    sources: list[SceneSource] = field(default_factory=list)
    transitions: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
