"""Skylight authentication: login exchange and per-client credential cache."""

import asyncio
import base64
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from .config import Settings
from .errors import AuthenticationError, ParseError, SkylightError, TransportError

logger = logging.getLogger(__name__)

SESSIONS_PATH = "/api/sessions"


@dataclass(frozen=True)
class SessionCredential:
    """A resolved credential. ``user_id`` is only known after a login exchange."""

    token: str
    user_id: Optional[str] = None
    email: Optional[str] = None
    subscription_status: Optional[str] = None


async def login(http: httpx.AsyncClient, email: str, password: str) -> SessionCredential:
    """Exchange account email and password for a session token."""
    try:
        response = await http.post(
            SESSIONS_PATH,
            json={"email": email, "password": password},
            headers={"Accept": "application/json"},
        )
    except httpx.TransportError as e:
        raise TransportError(f"Login request failed: {e}") from e

    if response.status_code == 401:
        raise AuthenticationError(
            "Invalid email or password. Check SKYLIGHT_EMAIL and SKYLIGHT_PASSWORD."
        )
    if not response.is_success:
        body = response.text[:200]
        message = f"Login failed: HTTP {response.status_code}"
        if body:
            message += f": {body}"
        raise SkylightError(
            message, "LOGIN_FAILED", response.status_code, response.status_code >= 500
        )

    try:
        data = response.json()["data"]
        attributes = data["attributes"]
        return SessionCredential(
            token=attributes["token"],
            user_id=str(data["id"]),
            email=attributes.get("email"),
            subscription_status=attributes.get("subscription_status"),
        )
    except (ValueError, KeyError, TypeError) as e:
        raise ParseError("Unexpected login response format") from e


class CredentialResolver:
    """Produces the Authorization header for every outgoing request.

    In token mode the configured token is returned as-is. In login mode the
    resolver moves between three states: idle (no credential, no login),
    logging in (``_login_task`` is set and shared by every concurrent caller)
    and ready (``_credential`` is set). ``invalidate`` drops back to idle.
    """

    def __init__(self, settings: Settings, http: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http = http
        self._credential: Optional[SessionCredential] = None
        self._login_task: Optional[asyncio.Task] = None

    @property
    def uses_login(self) -> bool:
        return self._settings.uses_login

    @property
    def subscription_status(self) -> Optional[str]:
        return self._credential.subscription_status if self._credential else None

    def has_plus(self) -> bool:
        return self.subscription_status == "plus"

    async def resolve(self) -> SessionCredential:
        if self._credential is not None:
            return self._credential

        if not self.uses_login:
            return SessionCredential(token=self._settings.token)

        if self._login_task is None:
            self._login_task = asyncio.ensure_future(self._login())
            self._login_task.add_done_callback(self._login_finished)
        # shield: one caller being cancelled must not abort the shared login
        return await asyncio.shield(self._login_task)

    def invalidate(self) -> None:
        """Forget the cached credential so the next resolve() logs in again."""
        if self._credential is not None:
            logger.info("Discarding cached Skylight session")
        self._credential = None

    async def authorization_header(self) -> str:
        credential = await self.resolve()
        if self.uses_login:
            # login tokens are only accepted combined with the user id
            pair = f"{credential.user_id}:{credential.token}".encode()
            return f"Basic {base64.b64encode(pair).decode()}"
        if self._settings.auth_type == "basic":
            return f"Basic {credential.token}"
        return f"Bearer {credential.token}"

    async def _login(self) -> SessionCredential:
        logger.info("Logging in to Skylight...")
        credential = await login(self._http, self._settings.email, self._settings.password)
        self._credential = credential
        logger.info(
            "Logged in as %s (%s)", credential.email, credential.subscription_status or "unknown"
        )
        return credential

    def _login_finished(self, task: asyncio.Task) -> None:
        self._login_task = None
        if not task.cancelled() and task.exception() is not None:
            logger.error("Skylight login failed: %s", task.exception())
