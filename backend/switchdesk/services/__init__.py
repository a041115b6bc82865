"""Services layer - Command handlers

Each service maps a validated request to registry mutations plus broadcast
events. Services are owned by the application state and reached through
dependency injection.
"""

from .config_store import ConfigStore
from .hardware_service import HardwareService
from .recording_service import RecordingService
from .scene_service import SceneService
from .stream_service import StreamService
from .system_service import SystemService
from .transition_service import TransitionService

__all__ = [
    "ConfigStore",
    "HardwareService",
    "RecordingService",
    "SceneService",
    "StreamService",
    "SystemService",
    "TransitionService",
]
