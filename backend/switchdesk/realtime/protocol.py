"""Client -> server message envelopes.

Inbound frames are parsed into one tagged variant per message kind; anything
that does not match is rejected before dispatch.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from switchdesk.core.errors import ChannelMessageError


class PingMessage(BaseModel):
    type: Literal["ping"]


class GetStatusMessage(BaseModel):
    type: Literal["get_status"]


class CommandMessage(BaseModel):
    type: Literal["command"]
    command: str
    params: dict[str, Any] = Field(default_factory=dict)
    request_id: str | None = None


class SubscribeMessage(BaseModel):
    type: Literal["subscribe"]
    events: list[str]


class UnsubscribeMessage(BaseModel):
    type: Literal["unsubscribe"]
    events: list[str]


InboundMessage = Annotated[
    PingMessage
    | GetStatusMessage
    | CommandMessage
    | SubscribeMessage
    | UnsubscribeMessage,
    Field(discriminator="type"),
]

_inbound_adapter: TypeAdapter[InboundMessage] = TypeAdapter(InboundMessage)


def parse_message(raw: str | bytes) -> InboundMessage:
    """Decode one text frame. Raises ChannelMessageError on bad JSON or shape."""
    try:
        return _inbound_adapter.validate_json(raw)
    except ValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        raise ChannelMessageError(f"Invalid message format: {first.get('msg', str(e))}") from e
