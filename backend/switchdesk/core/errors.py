"""Domain exceptions shared by services, routers and the channel dispatcher."""

from __future__ import annotations


class SwitchdeskError(Exception):
    """Base class for errors raised by the switchdesk services."""


class NotFoundError(SwitchdeskError, LookupError):
    """A referenced id is absent from its store."""

    def __init__(self, kind: str, entity_id: str) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind.capitalize()} {entity_id} not found")


class ConflictError(SwitchdeskError):
    """Duplicate id, or a lifecycle step the entity cannot take from its current status."""


class ConfigStoreError(SwitchdeskError):
    """The settings document could not be written."""


class ChannelMessageError(SwitchdeskError):
    """An inbound channel frame is not a valid message."""
