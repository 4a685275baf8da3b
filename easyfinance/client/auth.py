"""
Authentication endpoints.

Login uses cookie sessions: the identity service sets a cookie that the
shared httpx client sends on every later request. Results are booleans
derived from the response status.
"""

from typing import Optional

import structlog

from easyfinance.audit import AuditLogger
from easyfinance.client.base import ApiClient
from easyfinance.models.schemas import Credentials


logger = structlog.get_logger(__name__)


class AuthClient:
    """Sign in/out and registration, plus the signed-in flag."""

    def __init__(self, api: ApiClient, audit_logger: Optional[AuditLogger] = None):
        self._api = api
        self._audit_logger = audit_logger
        self._signed_in = False

    @property
    def is_signed_in(self) -> bool:
        return self._signed_in

    async def sign_in(self, email: str, password: str) -> bool:
        response = await self._api.request(
            "POST",
            "/api/account/login",
            params={"useCookies": "true"},
            json=Credentials(email=email, password=password).model_dump(by_alias=True),
        )
        self._signed_in = response.is_success

        if self._signed_in:
            if self._audit_logger:
                await self._audit_logger.log_user_signed_in(email=email)
        else:
            logger.info("sign_in_rejected", status_code=response.status_code)
        return self._signed_in

    async def sign_out(self) -> bool:
        response = await self._api.request("POST", "/api/account/logout")
        self.clear_session()
        if self._audit_logger:
            await self._audit_logger.log_user_signed_out()
        return response.is_success

    async def register(self, email: str, password: str) -> bool:
        response = await self._api.request(
            "POST",
            "/api/account/register",
            json=Credentials(email=email, password=password).model_dump(by_alias=True),
        )
        return response.is_success

    def clear_session(self) -> None:
        """Forget the session locally (after account deletion, for instance)."""
        self._signed_in = False
