"""EasyFinance API client package."""

from easyfinance.client.auth import AuthClient
from easyfinance.client.base import ApiClient, ApiError, raise_for_api_error
from easyfinance.client.projects import ProjectClient
from easyfinance.client.tokens import ConfirmationTokenStore
from easyfinance.client.users import UserClient

__all__ = [
    "ApiClient",
    "ApiError",
    "AuthClient",
    "ConfirmationTokenStore",
    "ProjectClient",
    "UserClient",
    "raise_for_api_error",
]
