"""
Data Models Package

Domain entities (validated through their setters), API schemas and
audit models.
"""

from easyfinance.models.entity import Entity
from easyfinance.models.user import User
from easyfinance.models.financial import (
    Attachment,
    Category,
    Expense,
    ExpenseItem,
    Income,
)
from easyfinance.models.project import Project, ProjectType
from easyfinance.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Entities
    "Entity",
    "User",
    "Attachment",
    "Category",
    "Expense",
    "ExpenseItem",
    "Income",
    "Project",
    "ProjectType",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
