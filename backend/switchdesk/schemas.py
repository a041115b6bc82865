"""Request models shared by the HTTP routers and the channel dispatcher.

Every inbound payload is validated against one of these models before it
reaches a service, so handlers never see missing or mistyped fields.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# ============================================
# Streams / Recordings
# ============================================


class StreamConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str | None = None
    destinations: list[dict[str, Any]] = Field(default_factory=list)
    video: dict[str, Any] = Field(default_factory=dict)
    audio: dict[str, Any] = Field(default_factory=dict)


class RecordingConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    format: str = "mp4"
    path: str = "./recordings"
    codec: str | None = None


class StartStreamRequest(BaseModel):
    config: StreamConfig = Field(default_factory=StreamConfig)


class StartRecordingRequest(BaseModel):
    config: RecordingConfig = Field(default_factory=RecordingConfig)


class StopStreamParams(BaseModel):
    stream_id: str


class StopRecordingParams(BaseModel):
    record_id: str


# ============================================
# Scenes / Sources
# ============================================


class SceneSourceIn(BaseModel):
    id: str
    type: Literal["video", "audio"] = "video"
    x: int | None = None
    y: int | None = None
    width: int | None = Field(default=None, ge=0)
    height: int | None = Field(default=None, ge=0)
    volume: float | None = Field(default=None, ge=0.0)
    muted: bool | None = None


class SceneCreate(BaseModel):
    id: str | None = None
    name: str = Field(min_length=1)
    description: str = ""
    layout: str = "fullscreen"
    sources: list[SceneSourceIn] = Field(default_factory=list)
    transitions: list[str] = Field(default_factory=list)
    created_at: datetime | None = None


class SceneUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    layout: str | None = None
    sources: list[SceneSourceIn] | None = None
    transitions: list[str] | None = None


class UpdateSceneParams(BaseModel):
    scene_id: str
    updates: SceneUpdate


class DeleteSceneParams(BaseModel):
    scene_id: str


class SetSceneParams(BaseModel):
    scene_id: str = Field(validation_alias=AliasChoices("scene_id", "sceneId"))
    target: Literal["program", "preview"] = "program"


class SourceSettingsIn(BaseModel):
    resolution: str | None = None
    fps: int | None = Field(default=None, gt=0)
    codec: str | None = None
    color_space: str | None = None
    sample_rate: int | None = Field(default=None, gt=0)
    channels: int | None = Field(default=None, gt=0)
    bitrate: int | None = Field(default=None, gt=0)


class SourceCreate(BaseModel):
    id: str | None = None
    name: str = Field(min_length=1)
    type: Literal["video", "audio"] = "video"
    device_id: str | None = None
    device_port: str | None = None
    settings: SourceSettingsIn = Field(default_factory=SourceSettingsIn)
    status: str = "active"


# ============================================
# Transitions
# ============================================


class TransitionRequest(BaseModel):
    type: str = "cut"
    # camelCase accepted for older front-ends
    from_scene: str = Field(validation_alias=AliasChoices("from_scene", "fromScene"))
    to_scene: str = Field(validation_alias=AliasChoices("to_scene", "toScene"))
    duration: int = Field(default=1000, ge=0, description="Duration in milliseconds")


# ============================================
# Settings document
# ============================================


class _Section(BaseModel):
    model_config = ConfigDict(extra="allow")


class SystemSection(_Section):
    name: str = "Switchdesk"
    version: str = "1.0.0"
    auto_start: bool = False
    log_level: str = "info"


class VideoSection(_Section):
    default_resolution: str = "1920x1080"
    default_fps: int = 50
    default_bitrate: int = 8_000_000
    default_codec: str = "h264"
    buffer_size: int = 10_000_000


class AudioSection(_Section):
    channels: int = 2
    sample_rate: int = 48000
    bitrate: int = 192_000
    codec: str = "aac"


class StreamingSection(_Section):
    default_protocol: str = "rtmp"
    adaptive_bitrate: bool = True
    redundancy: bool = False
    max_retries: int = 3
    destinations: list[dict[str, Any]] = Field(default_factory=list)


class RecordingSection(_Section):
    default_format: str = "mp4"
    default_codec: str = "h264"
    default_path: str = "./recordings"
    auto_segment: bool = False


class HardwareSection(_Section):
    blackmagic: bool = True
    ndi: bool = True
    usb: bool = True
    ip_cameras: bool = True


class UISection(_Section):
    theme: str = "dark"
    language: str = "en"
    multiviewer_layout: str = "2x2"
    show_audio_meters: bool = True


class ConfigDocument(BaseModel):
    """The persisted settings document. Save replaces it wholesale.

    Top-level sections this server does not know are stored and returned as-is.
    """

    model_config = ConfigDict(extra="allow")

    system: SystemSection = Field(default_factory=SystemSection)
    video: VideoSection = Field(default_factory=VideoSection)
    audio: AudioSection = Field(default_factory=AudioSection)
    streaming: StreamingSection = Field(default_factory=StreamingSection)
    recording: RecordingSection = Field(default_factory=RecordingSection)
    hardware: HardwareSection = Field(default_factory=HardwareSection)
    ui: UISection = Field(default_factory=UISection)
