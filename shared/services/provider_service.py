"""
Base class for the provider client wrappers.

Every wrapper method is an `async` function decorated with `provider_call(action)`.
The method body only has to build the request and reshape the JSON it gets back;
the decorator converts whatever goes wrong into a ServiceFailure:

- a non-2xx response (raised by `raise_for_status()`) becomes
  `Failed to <action>: <reason phrase>` with provider-specific details,
- a local validation error keeps its own message,
- any other transport or parse error (including an unexpected body shape) becomes `str(exc)` with a generic detail.
"""

import functools
import logging
from typing import Any, Dict, Optional

import httpx

from shared.errors import InvalidInputError
from shared.services.envelope import ServiceFailure, UNKNOWN_ERROR_DETAILS

logger = logging.getLogger(__name__)


def provider_call(action: str):
    """Wraps a service method so that it always returns a ServiceResult."""
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            try:
                return await func(self, *args, **kwargs)
            except httpx.HTTPStatusError as e:
                return self.failure_from_response(action, e.response)
            except InvalidInputError as e:
                logger.warning(f"Rejected request to {action}: {e.message}")
                return ServiceFailure(error=e.message)
            except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
                logger.error(f"Unexpected error while trying to {action}: {e}", exc_info=True)
                return ServiceFailure(
                    error=str(e) or f"Failed to {action}",
                    details=f"An unexpected error occurred while trying to {action}",
                )
        return wrapper
    return decorator


class ProviderService:
    """Shared plumbing for a REST provider reached through httpx."""

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None):
        self._owns_client = http_client is None
        self.http_client = http_client if http_client else httpx.AsyncClient()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._owns_client:
            await self.http_client.aclose()

    async def _get_auth_headers(self) -> Dict[str, str]:
        raise NotImplementedError

    def error_details(self, response: httpx.Response) -> str:
        """Extracts the provider's own error text from a failed response."""
        return UNKNOWN_ERROR_DETAILS

    def failure_from_response(self, action: str, response: httpx.Response) -> ServiceFailure:
        details = self.error_details(response)
        logger.error(f"Failed to {action}: HTTP {response.status_code} - {details}")
        return ServiceFailure(error=f"Failed to {action}: {response.reason_phrase}", details=details)

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Sends an authenticated request without checking its status."""
        headers = await self._get_auth_headers()
        headers.update(kwargs.pop("headers", None) or {})
        return await self.http_client.request(method, url, headers=headers, **kwargs)

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = await self._send(method, url, **kwargs)
        response.raise_for_status()
        return response


class GoogleService(ProviderService):
    """Base for the Google REST wrappers, authenticated with a bearer token."""

    def __init__(self, access_token: str, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__(http_client)
        self.access_token = access_token

    async def _get_auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}

    def error_details(self, response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return UNKNOWN_ERROR_DETAILS
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        return UNKNOWN_ERROR_DETAILS
