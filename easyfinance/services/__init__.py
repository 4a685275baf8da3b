"""
Services package.

Project operations live in easyfinance.services.projects and are imported
from there; this package only re-exports storage, which the audit logger
depends on.
"""

from easyfinance.services.storage import (
    AuditStorageInterface,
    DuplicateError,
    InMemoryAuditStorage,
    InMemoryRepository,
    NotFoundError,
    RepositoryInterface,
    StorageError,
)

__all__ = [
    "AuditStorageInterface",
    "DuplicateError",
    "InMemoryAuditStorage",
    "InMemoryRepository",
    "NotFoundError",
    "RepositoryInterface",
    "StorageError",
]
