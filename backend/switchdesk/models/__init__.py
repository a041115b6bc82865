"""Data models for switcher entities."""

from .device import Device
from .recording import FileInfo, Recording, RecordingStats, RecordingStatus
from .scene import Scene, SceneSource
from .source import Source, SourceSettings
from .stream import Stream, StreamStats, StreamStatus

__all__ = [
    "Device",
    "FileInfo",
    "Recording",
    "RecordingStats",
    "RecordingStatus",
    "Scene",
    "SceneSource",
    "Source",
    "SourceSettings",
    "Stream",
    "StreamStats",
    "StreamStatus",
]
