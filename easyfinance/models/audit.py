"""
Audit Models for EasyFinance

Every change to a user's financial data, and every account action, is
recorded as an audit event. This provides:
1. Traceability of who changed what
2. Debugging information when a request is rejected
3. A record of destructive account actions

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Projects
    PROJECT_CREATED = "project_created"
    PROJECT_UPDATED = "project_updated"
    PROJECT_DELETED = "project_deleted"

    # Project contents
    CATEGORY_ADDED = "category_added"
    INCOME_RECORDED = "income_recorded"
    EXPENSE_RECORDED = "expense_recorded"

    # Rejected input
    VALIDATION_FAILED = "validation_failed"

    # Account
    USER_SIGNED_IN = "user_signed_in"
    USER_SIGNED_OUT = "user_signed_out"
    ACCOUNT_DELETION_REQUESTED = "account_deletion_requested"
    ACCOUNT_DELETED = "account_deleted"

    # System events
    SYSTEM_ERROR = "system_error"
    EXTERNAL_SERVICE_ERROR = "external_service_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'project', 'expense', 'account')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one API request)"
    )

    # Event details
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_message: Optional[str] = None

    # User action tracking
    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.project_created(project_id, name)
        event = AuditEventBuilder.validation_failed("expense", "Amount", message)
    """

    @staticmethod
    def project_created(
        project_id: UUID,
        name: str,
        project_type: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROJECT_CREATED,
            entity_type="project",
            entity_id=project_id,
            correlation_id=correlation_id,
            description=f"Project created: {name}",
            details={"name": name, "type": project_type},
            is_user_action=True,
        )

    @staticmethod
    def project_updated(
        project_id: UUID,
        paths: list[str],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROJECT_UPDATED,
            entity_type="project",
            entity_id=project_id,
            correlation_id=correlation_id,
            description=f"Project updated: {', '.join(paths) or 'no changes'}",
            details={"paths": paths},
            is_user_action=True,
        )

    @staticmethod
    def project_deleted(
        project_id: UUID,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROJECT_DELETED,
            entity_type="project",
            entity_id=project_id,
            correlation_id=correlation_id,
            description="Project deleted",
            is_user_action=True,
        )

    @staticmethod
    def category_added(
        project_id: UUID,
        category_id: UUID,
        name: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_ADDED,
            entity_type="category",
            entity_id=category_id,
            correlation_id=correlation_id,
            description=f"Category added: {name}",
            details={"project_id": str(project_id), "name": name},
            is_user_action=True,
        )

    @staticmethod
    def income_recorded(
        project_id: UUID,
        income_id: UUID,
        amount: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INCOME_RECORDED,
            entity_type="income",
            entity_id=income_id,
            correlation_id=correlation_id,
            description=f"Income recorded: {amount}",
            details={"project_id": str(project_id), "amount": amount},
            is_user_action=True,
        )

    @staticmethod
    def expense_recorded(
        category_id: UUID,
        expense_id: UUID,
        name: str,
        amount: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_RECORDED,
            entity_type="expense",
            entity_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense recorded: {name} - {amount}",
            details={"category_id": str(category_id), "name": name, "amount": amount},
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        entity_type: str,
        property_name: str,
        message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type=entity_type,
            correlation_id=correlation_id,
            description=f"{entity_type.capitalize()} rejected: {message}",
            details={"property": property_name},
            error_message=message,
        )

    @staticmethod
    def user_signed_in(
        email: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_SIGNED_IN,
            entity_type="account",
            correlation_id=correlation_id,
            description="User signed in",
            details={"email": email},
            is_user_action=True,
        )

    @staticmethod
    def user_signed_out(correlation_id: Optional[UUID] = None) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_SIGNED_OUT,
            entity_type="account",
            correlation_id=correlation_id,
            description="User signed out",
            is_user_action=True,
        )

    @staticmethod
    def account_deletion_requested(
        requires_confirmation: bool,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_DELETION_REQUESTED,
            severity=AuditSeverity.WARNING,
            entity_type="account",
            correlation_id=correlation_id,
            description="Account deletion requested",
            details={"requires_confirmation": requires_confirmation},
            is_user_action=True,
        )

    @staticmethod
    def account_deleted(correlation_id: Optional[UUID] = None) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_DELETED,
            severity=AuditSeverity.WARNING,
            entity_type="account",
            correlation_id=correlation_id,
            description="Account deleted",
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )

    @staticmethod
    def external_service_error(
        service: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXTERNAL_SERVICE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"External service error: {service}",
            error_message=error_message,
            details={"service": service},
            correlation_id=correlation_id,
        )
