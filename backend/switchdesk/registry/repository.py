"""In-memory keyed store used for every entity kind."""

from __future__ import annotations

import dataclasses
import secrets
import time
from datetime import UTC, datetime, timedelta
from typing import Any, Generic, TypeVar

from switchdesk.core.errors import ConflictError, NotFoundError

T = TypeVar("T")

_ONE_TICK = timedelta(microseconds=1)


def utcnow() -> datetime:
    return datetime.now(UTC)


def generate_id(prefix: str) -> str:
    """``<prefix>_<epoch millis>_<random suffix>``"""
    return f"{prefix}_{int(time.time() * 1000)}_{secrets.token_hex(5)[:9]}"


class InMemoryRepository(Generic[T]):
    """Dict-backed repository for one entity kind.

    Entities are dataclasses exposing ``id``, ``created_at`` and ``updated_at``.
    Every method completes without awaiting, so callers on the event loop never
    observe a half-applied mutation.
    """

    def __init__(self, kind: str, id_prefix: str) -> None:
        self.kind = kind
        self.id_prefix = id_prefix
        self._items: dict[str, T] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._items

    def new_id(self) -> str:
        entity_id = generate_id(self.id_prefix)
        while entity_id in self._items:
            entity_id = generate_id(self.id_prefix)
        return entity_id

    def create(self, entity: T) -> T:
        """Store a new entity, assigning an id when it has none."""
        entity_id = getattr(entity, "id", None)
        if not entity_id:
            entity_id = self.new_id()
        elif entity_id in self._items:
            raise ConflictError(f"{self.kind.capitalize()} {entity_id} already exists")

        now = utcnow()
        entity = dataclasses.replace(
            entity,  # type: ignore[type-var]
            id=entity_id,
            created_at=getattr(entity, "created_at", None) or now,
            updated_at=now,
        )
        self._items[entity_id] = entity
        return entity

    def save(self, entity: T) -> T:
        """Insert or replace; an existing entity keeps its ``created_at``."""
        entity_id = getattr(entity, "id", None)
        existing = self._items.get(entity_id) if entity_id else None
        if existing is None:
            return self.create(entity)

        entity = dataclasses.replace(
            entity,  # type: ignore[type-var]
            created_at=existing.created_at,  # type: ignore[attr-defined]
            updated_at=self._next_stamp(existing),
        )
        self._items[entity_id] = entity
        return entity

    def find(self, entity_id: str) -> T | None:
        return self._items.get(entity_id)

    def get(self, entity_id: str) -> T:
        entity = self._items.get(entity_id)
        if entity is None:
            raise NotFoundError(self.kind, entity_id)
        return entity

    def list_all(self) -> list[T]:
        return list(self._items.values())

    def update(self, entity_id: str, **changes: Any) -> T:
        """Merge ``changes`` into the stored entity and stamp ``updated_at``."""
        existing = self.get(entity_id)
        changes.pop("id", None)
        changes.pop("created_at", None)
        changes["updated_at"] = self._next_stamp(existing)
        entity = dataclasses.replace(existing, **changes)  # type: ignore[type-var]
        self._items[entity_id] = entity
        return entity

    def delete(self, entity_id: str) -> T:
        if entity_id not in self._items:
            raise NotFoundError(self.kind, entity_id)
        return self._items.pop(entity_id)

    def discard(self, entity_id: str) -> T | None:
        return self._items.pop(entity_id, None)

    def clear(self) -> None:
        self._items.clear()

    @staticmethod
    def _next_stamp(existing: Any) -> datetime:
        """A timestamp strictly after the entity's previous ``updated_at``."""
        now = utcnow()
        previous = getattr(existing, "updated_at", None)
        if previous is not None and now <= previous:
            now = previous + _ONE_TICK
        return now
