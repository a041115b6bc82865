"""Dependency injection utilities for FastAPI"""

from fastapi import HTTPException, Request, WebSocket

from switchdesk.core.state import AppState
from switchdesk.services import (
    ConfigStore,
    HardwareService,
    RecordingService,
    SceneService,
    StreamService,
    SystemService,
    TransitionService,
)

# ============================================
# Application State
# ============================================


def _state_from(app) -> AppState:
    state = getattr(app.state, "switchdesk", None)
    if state is None:
        raise HTTPException(status_code=503, detail="Server not ready")
    return state


def get_app_state(request: Request) -> AppState:
    """Return the AppState created by the lifespan handler"""
    return _state_from(request.app)


def get_ws_app_state(websocket: WebSocket) -> AppState:
    """WebSocket variant of get_app_state"""
    return _state_from(websocket.app)


# ============================================
# Service Dependencies
# ============================================


def get_hardware_service(request: Request) -> HardwareService:
    return get_app_state(request).hardware


def get_stream_service(request: Request) -> StreamService:
    return get_app_state(request).streams


def get_recording_service(request: Request) -> RecordingService:
    return get_app_state(request).recordings


def get_scene_service(request: Request) -> SceneService:
    return get_app_state(request).scenes


def get_transition_service(request: Request) -> TransitionService:
    return get_app_state(request).transitions


def get_config_store(request: Request) -> ConfigStore:
    return get_app_state(request).config_store


def get_system_service(request: Request) -> SystemService:
    return get_app_state(request).system
