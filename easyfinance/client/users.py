"""
User account endpoints: profile, email/password changes, deletion.
"""

from typing import Optional

from easyfinance.client.base import ApiClient, raise_for_api_error
from easyfinance.models.schemas import (
    DeleteUserResponse,
    ManageInfoRequest,
    UserInfo,
    UserInfoRequest,
)


MANAGE_INFO_PATH = "/api/account/manage/info"
ACCOUNT_PATH = "/api/account"


class UserClient:
    def __init__(self, api: ApiClient):
        self._api = api

    async def get_user(self) -> UserInfo:
        """Profile of the signed-in user."""
        response = await self._api.request_ok("GET", MANAGE_INFO_PATH)
        return UserInfo.model_validate(response.json())

    async def set_user_info(
        self,
        first_name: str,
        last_name: str,
        preferred_currency: str,
    ) -> UserInfo:
        body = UserInfoRequest(
            first_name=first_name,
            last_name=last_name,
            preferred_currency=preferred_currency,
        )
        response = await self._api.request_ok(
            "PUT",
            MANAGE_INFO_PATH,
            json=body.model_dump(by_alias=True),
        )
        return UserInfo.model_validate(response.json())

    async def manage_info(
        self,
        new_email: Optional[str] = None,
        new_password: Optional[str] = None,
        old_password: Optional[str] = None,
    ) -> bool:
        """
        Change email and/or password.

        Raises:
            ApiError: With per-field errors when the change is rejected
        """
        body = ManageInfoRequest(
            new_email=new_email,
            new_password=new_password,
            old_password=old_password,
        )
        await self._api.request_ok(
            "POST",
            MANAGE_INFO_PATH,
            json=body.model_dump(by_alias=True, exclude_none=True),
        )
        return True

    async def delete_user(self, confirmation_token: Optional[str] = None) -> DeleteUserResponse:
        """
        Delete the signed-in account.

        Without a token the API normally answers with a confirmation token
        and a message for the user. Sending that token back finalizes the
        deletion.
        """
        params = {"confirmationToken": confirmation_token} if confirmation_token else None
        response = await self._api.request("DELETE", ACCOUNT_PATH, params=params)
        raise_for_api_error(response)

        try:
            body = response.json() if response.content else {}
        except ValueError:
            # Plain-text success body
            body = {}
        result = DeleteUserResponse.model_validate(body if isinstance(body, dict) else {})
        # A success that doesn't ask for confirmation is a completed deletion
        result.deleted = confirmation_token is not None or not result.confirmation_token
        return result
