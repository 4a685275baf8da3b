"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep business logic decoupled from the database
2. Use in-memory storage for testing
3. Swap in a relational backend without touching the services

The interface is intentionally simple - we're not building a full ORM.
Just save / find / delete / list per entity type.
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar
from uuid import UUID

from easyfinance.models.audit import AuditEvent
from easyfinance.models.entity import Entity


E = TypeVar("E", bound=Entity)


class RepositoryInterface(ABC, Generic[E]):
    """
    Abstract interface for entity storage.

    Any storage implementation (in-memory, PostgreSQL, etc.)
    must implement these methods.
    """

    @abstractmethod
    async def save(self, entity: E) -> E:
        """
        Insert or replace an entity.

        Args:
            entity: The entity to store

        Returns:
            The stored entity

        Raises:
            StorageError: If save fails
        """
        pass

    @abstractmethod
    async def find(self, entity_id: UUID) -> Optional[E]:
        """
        Retrieve an entity by its ID.

        Returns:
            The entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def delete(self, entity_id: UUID) -> bool:
        """
        Delete an entity by ID.

        Returns:
            True if something was deleted, False if the ID was unknown
        """
        pass

    @abstractmethod
    async def list(self, limit: int = 100, offset: int = 0) -> list[E]:
        """
        List stored entities in insertion order.

        Args:
            limit: Maximum number of results
            offset: Number of results to skip
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a specific entity, in chronological order.
        """
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events (newest first).
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass
