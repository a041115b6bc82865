"""Capture device model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Device:
    """A detected (or simulated) hardware capture endpoint."""

    id: str
    type: str  # 'blackmagic' | 'ndi' | 'usb' | 'ip_camera'
    name: str
    status: str = "connected"  # 'connected' | 'available' | 'detected' | 'disconnected'
    model: str | None = None
    inputs: list[str] = field(default_factory=list)
    outputs: list[str] = field(default_factory=list)
    formats: list[str] = field(default_factory=list)
    address: str | None = None
    resolution: str | None = None
    fps: int | None = None
    audio: bool = False
    vendor: str | None = None
    serial: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
