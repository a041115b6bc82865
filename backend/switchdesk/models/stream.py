"""Stream session models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any


class StreamStatus(StrEnum):
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


@dataclass
class StreamStats:
    bitrate: float = 0
    bitrate_video: float = 0
    bitrate_audio: float = 0
    fps: float = 0
    dropped_frames: int = 0
    viewers: int = 0
    latency: float = 0


@dataclass
class Stream:
    """A live outbound transmission session."""

    id: str
    config: dict[str, Any] = field(default_factory=dict)
    status: StreamStatus = StreamStatus.STARTING
    start_time: datetime | None = None
    end_time: datetime | None = None
    stats: StreamStats = field(default_factory=StreamStats)
    destinations: list[dict[str, Any]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
