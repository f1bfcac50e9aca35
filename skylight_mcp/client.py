"""Authenticated HTTP client for the Skylight API."""

import logging
from typing import Any, Dict, Optional, Union

import httpx

from .auth import CredentialResolver
from .config import Settings
from .errors import (
    AuthenticationError,
    NotFoundError,
    ParseError,
    RateLimitError,
    SkylightError,
    TransportError,
)

logger = logging.getLogger(__name__)

BASE_URL = "https://app.ourskylight.com"
REQUEST_TIMEOUT = 30.0
FRAME_PLACEHOLDER = "{frame_id}"

QueryValue = Union[str, int, float, bool, None]


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


class SkylightClient:
    """One household's view of the Skylight API.

    Owns its HTTP connection pool and credential state, so several clients
    with different settings can live in the same process.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        base_url: str = BASE_URL,
    ) -> None:
        self._settings = settings
        self._http = httpx.AsyncClient(
            base_url=base_url, timeout=REQUEST_TIMEOUT, transport=transport
        )
        self.auth = CredentialResolver(settings, self._http)

    async def __aenter__(self) -> "SkylightClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def frame_id(self) -> str:
        return self._settings.frame_id

    @property
    def timezone(self) -> str:
        return self._settings.timezone

    @property
    def subscription_status(self) -> Optional[str]:
        return self.auth.subscription_status

    def has_plus(self) -> bool:
        return self.auth.has_plus()

    async def initialize(self) -> None:
        """Resolve credentials up front (logs in when configured for login)."""
        await self.auth.resolve()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, QueryValue]] = None,
        body: Any = None,
    ) -> Any:
        """Perform one API operation and return the decoded JSON body.

        A 401 on a login session discards the credential and the request is
        sent once more with a fresh login. A second 401 is final.
        """
        url = path.replace(FRAME_PLACEHOLDER, self.frame_id)
        query = {key: value for key, value in (params or {}).items() if value is not None}

        for attempt in range(2):
            headers = {
                "Authorization": await self.auth.authorization_header(),
                "Accept": "application/json",
            }
            try:
                if body is not None:
                    response = await self._http.request(
                        method, url, params=query, headers=headers, json=body
                    )
                else:
                    response = await self._http.request(method, url, params=query, headers=headers)
            except httpx.TransportError as e:
                raise TransportError(f"{method} {url} failed: {e}") from e

            if response.status_code == 401 and self.auth.uses_login and attempt == 0:
                logger.warning("Skylight returned 401 for %s %s; logging in again", method, url)
                self.auth.invalidate()
                continue
            return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Any:
        status = response.status_code

        if response.is_success or status == 304:
            if status == 304:
                return {}
            if status == 204 or not response.content:
                return None
            try:
                return response.json()
            except ValueError as e:
                raise ParseError("Skylight returned a non-JSON response") from e

        if status == 401:
            self.auth.invalidate()
            if self.auth.uses_login:
                raise AuthenticationError(
                    "Authentication failed even after logging in again. "
                    "Check that SKYLIGHT_FRAME_ID belongs to this account."
                )
            raise AuthenticationError()

        if status == 404:
            raise NotFoundError("Resource")

        if status == 429:
            raise RateLimitError(_parse_retry_after(response.headers.get("Retry-After")))

        message = f"HTTP {status}"
        body = response.text
        if body:
            message += f": {body[:200]}"
        raise SkylightError(message, "HTTP_ERROR", status, status >= 500)

    async def get(self, path: str, params: Optional[Dict[str, QueryValue]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Any = None) -> Any:
        return await self.request("POST", path, body=body)

    async def put(self, path: str, body: Any = None) -> Any:
        return await self.request("PUT", path, body=body)

    async def patch(self, path: str, body: Any = None) -> Any:
        return await self.request("PATCH", path, body=body)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)
