"""
HTTP client for the EasyFinance API.

One ApiClient owns one httpx.AsyncClient (and so one cookie jar, which
carries the login session). Resource clients (projects, auth, users)
share one ApiClient.

Transport failures (connection refused, timeouts...) are retried with
exponential back-off. HTTP error statuses are not retried: they are
answers, not failures.
"""

from typing import Any, Optional

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from easyfinance.config import ApiSettings, get_settings
from easyfinance.models.schemas import ApiErrorResponse


logger = structlog.get_logger(__name__)


class ApiError(Exception):
    """
    The API rejected a request, or could not be reached.

    Attributes:
        message: Error message
        status_code: HTTP status code, None when no response was received
        errors: Per-field messages from the response body, if any
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[dict[str, list[str]]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.errors = errors or {}
        super().__init__(message)


class ApiClient:
    """
    Thin async wrapper around httpx with retry and error mapping.

    Use as an async context manager, or call close() when done.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        settings: Optional[ApiSettings] = None,
    ):
        """
        Args:
            base_url: API root (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
            transport: Custom httpx transport, e.g. httpx.MockTransport in tests
            settings: API settings (defaults to environment)
        """
        self._settings = settings or get_settings().api
        self.base_url = (base_url or self._settings.base_url).rstrip("/")
        self.timeout = timeout or self._settings.timeout_seconds
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self._settings.retry_attempts),
            wait=wait_exponential(
                multiplier=self._settings.retry_min_wait,
                min=self._settings.retry_min_wait,
                max=self._settings.retry_max_wait,
            ),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        """
        Send a request and return the response, whatever its status.

        Raises:
            ApiError: If the API could not be reached after all retries
        """
        client = self._get_client()
        try:
            async for attempt in self._retrying():
                with attempt:
                    return await client.request(method, path, json=json, params=params)
        except httpx.TransportError as e:
            logger.error(
                "api_unreachable",
                method=method,
                path=path,
                error=str(e),
            )
            raise ApiError(f"Could not reach the API: {e}") from e

    async def request_ok(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        """Like request(), but raises ApiError on a 4xx/5xx status."""
        response = await self.request(method, path, json=json, params=params)
        raise_for_api_error(response)
        return response


def raise_for_api_error(response: httpx.Response) -> None:
    """Map an error response to ApiError, keeping per-field messages."""
    if not response.is_error:
        return

    errors: dict[str, list[str]] = {}
    message = f"API request failed with status {response.status_code}"
    try:
        body = ApiErrorResponse.model_validate(response.json())
        errors = body.errors
        if body.title:
            message = body.title
    except (ValueError, PydanticValidationError):
        # Not a problem-details body; keep the generic message
        pass

    logger.warning(
        "api_error_response",
        status_code=response.status_code,
        url=str(response.request.url),
        fields=sorted(errors),
    )
    raise ApiError(message, status_code=response.status_code, errors=errors)
