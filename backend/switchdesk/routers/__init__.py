"""API Routers package

This package contains all API route handlers.
Routers are organized by feature domain.
"""

from . import (
    config_router,
    hardware_router,
    health_router,
    recordings_router,
    scenes_router,
    sources_router,
    streams_router,
    system_router,
    transition_router,
    ws_router,
)

__all__ = [
    "config_router",
    "hardware_router",
    "health_router",
    "recordings_router",
    "scenes_router",
    "sources_router",
    "streams_router",
    "system_router",
    "transition_router",
    "ws_router",
]
