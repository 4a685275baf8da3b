"""
In-memory storage.

Used by tests and local runs. Entities are kept by reference, so a saved
entity and the one returned by find() are the same object.
"""

from typing import Optional
from uuid import UUID

from easyfinance.models.audit import AuditEvent
from easyfinance.services.storage.interface import (
    AuditStorageInterface,
    DuplicateError,
    E,
    RepositoryInterface,
)


class InMemoryRepository(RepositoryInterface[E]):
    """Dict-backed repository keyed by entity id."""

    def __init__(self):
        self._items: dict[UUID, E] = {}

    async def save(self, entity: E) -> E:
        self._items[entity.id] = entity
        return entity

    async def add(self, entity: E) -> E:
        """Insert only; raises DuplicateError if the id is taken."""
        if entity.id in self._items:
            raise DuplicateError(f"{type(entity).__name__} {entity.id} already exists")
        return await self.save(entity)

    async def find(self, entity_id: UUID) -> Optional[E]:
        return self._items.get(entity_id)

    async def delete(self, entity_id: UUID) -> bool:
        return self._items.pop(entity_id, None) is not None

    async def list(self, limit: int = 100, offset: int = 0) -> list[E]:
        return list(self._items.values())[offset:offset + limit]

    def __len__(self) -> int:
        return len(self._items)


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only list of audit events."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    async def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: UUID,
    ) -> list[AuditEvent]:
        return [
            e for e in self._events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]

    async def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
