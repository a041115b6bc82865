"""Recording session models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any


class RecordingStatus(StrEnum):
    RECORDING = "recording"
    STOPPED = "stopped"


@dataclass
class FileInfo:
    path: str
    filename: str
    size: int = 0
    duration: float = 0.0
    format: str = "mp4"


@dataclass
class RecordingStats:
    video_bitrate: float = 0
    audio_bitrate: float = 0
    fps: float = 0
    frame_count: int = 0


@dataclass
class Recording:
    """A local capture-to-file session."""

    id: str
    file_info: FileInfo
    config: dict[str, Any] = field(default_factory=dict)
    status: RecordingStatus = RecordingStatus.RECORDING
    start_time: datetime | None = None
    end_time: datetime | None = None
    stats: RecordingStats = field(default_factory=RecordingStats)
    created_at: datetime | None = None
    updated_at: datetime | None = None
