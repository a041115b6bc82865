"""Source model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class SourceSettings:
    resolution: str | None = None
    fps: int | None = None
    codec: str | None = None
    color_space: str | None = None
    sample_rate: int | None = None
    channels: int | None = None
    bitrate: int | None = None


@dataclass
class Source:
    """A named reference to a device's capture feed."""

    id: str
    name: str
    type: str = "video"  # 'video' | 'audio'
    device_id: str | None = None
    device_port: str | None = None
    settings: SourceSettings = field(default_factory=SourceSettings)
    status: str = "active"
    created_at: datetime | None = None
    updated_at: datetime | None = None
