"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Currently implements an in-memory backend, designed to be swappable.
"""

from easyfinance.services.storage.interface import (
    AuditStorageInterface,
    DuplicateError,
    NotFoundError,
    RepositoryInterface,
    StorageError,
)
from easyfinance.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryRepository,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "RepositoryInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryRepository",
]
