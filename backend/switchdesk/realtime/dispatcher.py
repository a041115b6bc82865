"""Routes inbound channel messages to services and answers the sender."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from switchdesk.core.errors import ChannelMessageError, SwitchdeskError
from switchdesk.realtime.events import EventType, make_event
from switchdesk.realtime.hub import ClientConnection
from switchdesk.realtime.protocol import (
    CommandMessage,
    GetStatusMessage,
    PingMessage,
    SubscribeMessage,
    UnsubscribeMessage,
    parse_message,
)
from switchdesk.schemas import (
    ConfigDocument,
    DeleteSceneParams,
    RecordingConfig,
    SceneCreate,
    SetSceneParams,
    SourceCreate,
    StopRecordingParams,
    StopStreamParams,
    StreamConfig,
    TransitionRequest,
    UpdateSceneParams,
)

if TYPE_CHECKING:
    from switchdesk.core.state import AppState

logger = logging.getLogger(__name__)


class _NoParams(BaseModel):
    pass


CommandHandler = Callable[["AppState", Any], Awaitable[dict[str, Any]]]


async def _start_stream(state: AppState, params: StreamConfig) -> dict[str, Any]:
    return {"stream_id": await state.streams.start_stream(params)}


async def _stop_stream(state: AppState, params: StopStreamParams) -> dict[str, Any]:
    await state.streams.stop_stream(params.stream_id)
    return {"stream_id": params.stream_id}


async def _start_recording(state: AppState, params: RecordingConfig) -> dict[str, Any]:
    return {"record_id": await state.recordings.start_recording(params)}


async def _stop_recording(state: AppState, params: StopRecordingParams) -> dict[str, Any]:
    recording = await state.recordings.stop_recording(params.record_id)
    return {"record_id": params.record_id, "recording": recording}


async def _transition(state: AppState, params: TransitionRequest) -> dict[str, Any]:
    return {"transition": await state.transitions.perform_transition(params)}


async def _save_scene(state: AppState, params: SceneCreate) -> dict[str, Any]:
    return {"scene": await state.scenes.save_scene(params)}


async def _update_scene(state: AppState, params: UpdateSceneParams) -> dict[str, Any]:
    return {"scene": await state.scenes.update_scene(params.scene_id, params.updates)}


async def _delete_scene(state: AppState, params: DeleteSceneParams) -> dict[str, Any]:
    await state.scenes.delete_scene(params.scene_id)
    return {"scene_id": params.scene_id}


async def _set_scene(state: AppState, params: SetSceneParams) -> dict[str, Any]:
    previous = await state.scenes.set_scene(params.scene_id, params.target)
    return {"scene_id": params.scene_id, "target": params.target, "previous": previous}


async def _add_source(state: AppState, params: SourceCreate) -> dict[str, Any]:
    return {"source": await state.scenes.add_source(params)}


async def _scan_hardware(state: AppState, params: _NoParams) -> dict[str, Any]:
    return {"devices": await state.hardware.scan()}


async def _save_config(state: AppState, params: ConfigDocument) -> dict[str, Any]:
    return {"config": (await state.config_store.save(params)).model_dump()}


async def _get_config(state: AppState, params: _NoParams) -> dict[str, Any]:
    return {"config": state.config_store.current.model_dump()}


COMMANDS: dict[str, tuple[type[BaseModel], CommandHandler]] = {
    "start_stream": (StreamConfig, _start_stream),
    "stop_stream": (StopStreamParams, _stop_stream),
    "start_recording": (RecordingConfig, _start_recording),
    "stop_recording": (StopRecordingParams, _stop_recording),
    "transition": (TransitionRequest, _transition),
    "save_scene": (SceneCreate, _save_scene),
    "update_scene": (UpdateSceneParams, _update_scene),
    "delete_scene": (DeleteSceneParams, _delete_scene),
    "set_scene": (SetSceneParams, _set_scene),
    "add_source": (SourceCreate, _add_source),
    "scan_hardware": (_NoParams, _scan_hardware),
    "save_config": (ConfigDocument, _save_config),
    "get_config": (_NoParams, _get_config),
}


class MessageDispatcher:
    """Handles one client's inbound frames against the application state."""

    def __init__(self, state: AppState) -> None:
        self.state = state
        self.hub = state.hub

    async def welcome(self, client: ClientConnection) -> None:
        await self.hub.send_to_one(
            client,
            make_event(
                EventType.WELCOME,
                client_id=client.client_id,
                system=self.state.system.snapshot(),
            ),
        )

    async def handle(self, client: ClientConnection, raw: str | bytes) -> None:
        """Process one frame. Malformed frames get an ``error`` reply; the channel stays open."""
        try:
            message = parse_message(raw)
        except ChannelMessageError as e:
            logger.warning(f"Bad message from {client.client_id}: {e}")
            await self.hub.send_to_one(client, make_event(EventType.ERROR, error=str(e)))
            return

        if isinstance(message, PingMessage):
            await self.hub.send_to_one(client, make_event(EventType.PONG))
        elif isinstance(message, GetStatusMessage):
            await self.hub.send_to_one(
                client, make_event(EventType.SYSTEM_STATUS, data=self.state.system.stats())
            )
        elif isinstance(message, SubscribeMessage):
            current = self.hub.subscribe(client.client_id, message.events)
            await self.hub.send_to_one(
                client, make_event(EventType.SUBSCRIPTION_CONFIRMED, events=current)
            )
        elif isinstance(message, UnsubscribeMessage):
            removed = self.hub.unsubscribe(client.client_id, message.events)
            await self.hub.send_to_one(
                client, make_event(EventType.UNSUBSCRIPTION_CONFIRMED, events=removed)
            )
        elif isinstance(message, CommandMessage):
            await self.handle_command(client, message)

    async def handle_command(self, client: ClientConnection, message: CommandMessage) -> None:
        logger.info(f"Client command ({client.client_id}): {message.command}")
        response: dict[str, Any] = {"command": message.command}
        if message.request_id is not None:
            response["request_id"] = message.request_id

        entry = COMMANDS.get(message.command)
        if entry is None:
            response.update(success=False, error="Unknown command")
        else:
            params_model, handler = entry
            try:
                params = params_model.model_validate(message.params)
                result = await handler(self.state, params)
            except ValidationError as e:
                first = e.errors()[0] if e.errors() else {}
                location = ".".join(str(part) for part in first.get("loc", ()))
                error = f"Invalid params: {location} {first.get('msg', '')}".strip()
                response.update(success=False, error=error)
            except SwitchdeskError as e:
                response.update(success=False, error=str(e))
            else:
                response.update(success=True, **result)

        await self.hub.send_to_one(client, make_event(EventType.COMMAND_RESPONSE, **response))
