"""Server -> client message types."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from switchdesk.registry import utcnow


class EventType(StrEnum):
    # Replies to a single client
    WELCOME = "welcome"
    PONG = "pong"
    SYSTEM_STATUS = "system_status"
    COMMAND_RESPONSE = "command_response"
    SUBSCRIPTION_CONFIRMED = "subscription_confirmed"
    UNSUBSCRIPTION_CONFIRMED = "unsubscription_confirmed"
    ERROR = "error"

    # Broadcasts
    STREAM_STARTED = "stream_started"
    STREAM_STATS = "stream_stats"
    STREAM_STOPPING = "stream_stopping"
    STREAM_STOPPED = "stream_stopped"
    RECORDING_STARTED = "recording_started"
    RECORDING_STATS = "recording_stats"
    RECORDING_STOPPED = "recording_stopped"
    SCENE_SAVED = "scene_saved"
    SCENE_UPDATED = "scene_updated"
    SCENE_DELETED = "scene_deleted"
    SCENE_CHANGED = "scene_changed"
    SOURCE_ADDED = "source_added"
    HARDWARE_UPDATED = "hardware_updated"
    HARDWARE_SCANNED = "hardware_scanned"
    CONFIG_UPDATED = "config_updated"
    TRANSITION_STARTED = "transition_started"
    TRANSITION_COMPLETED = "transition_completed"
    CLIENT_CONNECTED = "client_connected"
    CLIENT_DISCONNECTED = "client_disconnected"
    SYSTEM_RESTARTING = "system_restarting"
    SERVER_SHUTDOWN = "server_shutdown"


# Subscription wildcard
ALL_EVENTS = "all"


def make_event(event_type: EventType, **payload: Any) -> dict[str, Any]:
    """Build an outbound message: ``{"type", "timestamp", **payload}``."""
    return {"type": event_type.value, "timestamp": utcnow().isoformat(), **payload}
