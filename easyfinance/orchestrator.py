"""
Main Orchestrator for EasyFinance

Ties the components together and defines the multi-step flows:
1. Account deletion (request -> confirmation token -> confirm -> signed out)
2. Component wiring for an application run

DESIGN DECISION: Account deletion is never a single call. The first call
only obtains a confirmation token and a message for the user; the
account is removed when the token is sent back. The token is kept in a
ConfirmationTokenStore in between.
"""

from typing import Optional

import structlog

from easyfinance.audit import AuditLogger, configure_logging
from easyfinance.client import (
    ApiClient,
    ApiError,
    AuthClient,
    ConfirmationTokenStore,
    ProjectClient,
    UserClient,
)
from easyfinance.config import validate_all_settings
from easyfinance.models.project import Project
from easyfinance.services.projects import ProjectService
from easyfinance.services.storage import InMemoryAuditStorage, InMemoryRepository


logger = structlog.get_logger(__name__)

DELETION_FAILED_MESSAGE = (
    "Account deletion failed. Please log out, then log back in and try again"
)


class AccountDeletionError(Exception):
    """The account could not be deleted."""
    pass


class AccountDeletionFlow:
    """
    Orchestrates the two-step account deletion.

    Flow:
    1. request_deletion() -> API returns a token + message, token is stored
    2. The user reads the message and confirms
    3. confirm_deletion() -> token is resubmitted, store cleared, signed out
    """

    def __init__(
        self,
        user_client: UserClient,
        token_store: Optional[ConfirmationTokenStore] = None,
        auth_client: Optional[AuthClient] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._users = user_client
        self._tokens = token_store or ConfirmationTokenStore()
        self._auth = auth_client
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def has_pending_confirmation(self) -> bool:
        return self._tokens.get_token() is not None

    async def request_deletion(self) -> Optional[str]:
        """
        Start a deletion.

        Returns the confirmation message to show the user. If a token is
        already pending, no request is made and its message is returned.
        """
        if self.has_pending_confirmation:
            return self._tokens.get_confirmation_message()

        try:
            response = await self._users.delete_user()
        except ApiError as e:
            await self._audit_logger.log_external_service_error(
                service="account",
                error_message=e.message,
            )
            raise AccountDeletionError(
                "Failed to delete account. Please try again later"
            ) from e

        await self._audit_logger.log_account_deletion_requested(
            requires_confirmation=response.requires_confirmation,
        )

        if response.requires_confirmation:
            self._tokens.set_token(
                response.confirmation_token,
                response.confirmation_message,
            )
        elif response.deleted:
            await self._finish()

        return response.confirmation_message

    async def confirm_deletion(self) -> bool:
        """
        Send the stored token back to finalize the deletion.

        Raises:
            AccountDeletionError: No token pending, or the API refused
        """
        token = self._tokens.get_token()
        if token is None:
            raise AccountDeletionError("No account deletion is awaiting confirmation")

        try:
            await self._users.delete_user(token)
        except ApiError as e:
            await self._audit_logger.log_external_service_error(
                service="account",
                error_message=e.message,
            )
            raise AccountDeletionError(DELETION_FAILED_MESSAGE) from e

        await self._finish()
        return True

    async def _finish(self) -> None:
        self._tokens.clear_token()
        if self._auth:
            self._auth.clear_session()
        await self._audit_logger.log_account_deleted()


def create_app_components(
    api_client: Optional[ApiClient] = None,
) -> tuple[ProjectService, ProjectClient, AuthClient, AccountDeletionFlow]:
    """
    Factory function to create all application components.

    Args:
        api_client: Shared API client. Created from settings if None.

    Returns:
        (project_service, project_client, auth_client, account_deletion_flow)
    """
    configure_logging()
    for name, ok in validate_all_settings().items():
        if ok is False:
            logger.warning("invalid_settings", section=name)

    audit_logger = AuditLogger(InMemoryAuditStorage())
    project_service = ProjectService(
        repository=InMemoryRepository[Project](),
        audit_logger=audit_logger,
    )

    api_client = api_client or ApiClient()
    auth_client = AuthClient(api_client, audit_logger=audit_logger)
    deletion_flow = AccountDeletionFlow(
        user_client=UserClient(api_client),
        token_store=ConfirmationTokenStore(),
        auth_client=auth_client,
        audit_logger=audit_logger,
    )

    return project_service, ProjectClient(api_client), auth_client, deletion_flow
