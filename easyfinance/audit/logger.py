"""
Audit Logger

DESIGN DECISION: Every change to financial data and every account action
is logged. This provides:
1. Traceability of who changed what
2. Debugging capability when input is rejected
3. A record of destructive account actions

The audit logger:
- Is async so services can await it inline
- Gracefully handles failures (doesn't crash the app if logging fails)
- Supports correlation IDs to trace related events
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from easyfinance.config import get_settings
from easyfinance.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from easyfinance.services.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: Optional[str] = None) -> None:
    """Route stdlib logging (and so structlog) at the configured level."""
    level = level or get_settings().app.log_level
    logging.basicConfig(format="%(message)s", level=getattr(logging, level))


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage (for persistence), when one is configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("easyfinance.audit")

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return await self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_project_created(
        self,
        project_id: UUID,
        name: str,
        project_type: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.project_created(
            project_id=project_id,
            name=name,
            project_type=project_type,
            correlation_id=correlation_id,
        ))

    async def log_project_updated(
        self,
        project_id: UUID,
        paths: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.project_updated(
            project_id=project_id,
            paths=paths,
            correlation_id=correlation_id,
        ))

    async def log_project_deleted(
        self,
        project_id: UUID,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.project_deleted(
            project_id=project_id,
            correlation_id=correlation_id,
        ))

    async def log_category_added(
        self,
        project_id: UUID,
        category_id: UUID,
        name: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.category_added(
            project_id=project_id,
            category_id=category_id,
            name=name,
            correlation_id=correlation_id,
        ))

    async def log_income_recorded(
        self,
        project_id: UUID,
        income_id: UUID,
        amount: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.income_recorded(
            project_id=project_id,
            income_id=income_id,
            amount=amount,
            correlation_id=correlation_id,
        ))

    async def log_expense_recorded(
        self,
        category_id: UUID,
        expense_id: UUID,
        name: str,
        amount: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.expense_recorded(
            category_id=category_id,
            expense_id=expense_id,
            name=name,
            amount=amount,
            correlation_id=correlation_id,
        ))

    async def log_validation_failed(
        self,
        entity_type: str,
        property_name: str,
        message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log rejected input."""
        await self.log(AuditEventBuilder.validation_failed(
            entity_type=entity_type,
            property_name=property_name,
            message=message,
            correlation_id=correlation_id,
        ))

    async def log_user_signed_in(
        self,
        email: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.user_signed_in(
            email=email,
            correlation_id=correlation_id,
        ))

    async def log_user_signed_out(self, correlation_id: Optional[UUID] = None) -> None:
        await self.log(AuditEventBuilder.user_signed_out(correlation_id=correlation_id))

    async def log_account_deletion_requested(
        self,
        requires_confirmation: bool,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.account_deletion_requested(
            requires_confirmation=requires_confirmation,
            correlation_id=correlation_id,
        ))

    async def log_account_deleted(self, correlation_id: Optional[UUID] = None) -> None:
        await self.log(AuditEventBuilder.account_deleted(correlation_id=correlation_id))

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        await self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))

    async def log_external_service_error(
        self,
        service: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log external service error."""
        await self.log(AuditEventBuilder.external_service_error(
            service=service,
            error_message=error_message,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., one API request).
    Pass it through all subsequent operations.
    """
    return uuid4()
