"""Shared pytest fixtures: a fake Skylight API behind httpx.MockTransport."""

import asyncio
import json
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx
import pytest
import pytest_asyncio

from skylight_mcp.client import SkylightClient
from skylight_mcp.config import Settings

FRAME_ID = "frame-42"
USER_ID = "7"
LOGIN_TOKEN = "session-token"

Reply = Union[Dict[str, Any], Callable[[httpx.Request], httpx.Response]]


def reply(status: int = 200, json_body: Any = None, headers: Optional[Dict[str, str]] = None,
          text: Optional[str] = None) -> Dict[str, Any]:
    return {"status": status, "json": json_body, "headers": headers or {}, "text": text}


def login_body(token: str = LOGIN_TOKEN, subscription: str = "plus") -> Dict[str, Any]:
    return {
        "data": {
            "id": USER_ID,
            "type": "authenticated_user",
            "attributes": {"email": "parent@example.com", "token": token, "subscription_status": subscription},
        }
    }


class FakeSkylight:
    """Routes requests by (method, path) to queued replies and records every request.

    Each route holds a queue; the last reply repeats once the queue is down
    to one. Unrouted requests get a 404.
    """

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], List[Reply]] = {}
        self.requests: List[httpx.Request] = []
        self.delay = 0.0

    def add(self, method: str, path: str, *replies: Reply) -> "FakeSkylight":
        self.routes.setdefault((method.upper(), path), []).extend(replies)
        return self

    def frame(self, suffix: str = "") -> str:
        return f"/api/frames/{FRAME_ID}{suffix}"

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method.upper() and r.url.path == path]

    def last_json(self, method: str, path: str) -> Any:
        return json.loads(self.calls(method, path)[-1].content)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)

        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"error": "not found"})
        entry = queue.pop(0) if len(queue) > 1 else queue[0]
        if callable(entry):
            return entry(request)
        if entry["text"] is not None:
            return httpx.Response(entry["status"], text=entry["text"], headers=entry["headers"])
        if entry["json"] is None:
            return httpx.Response(entry["status"], headers=entry["headers"])
        return httpx.Response(entry["status"], json=entry["json"], headers=entry["headers"])

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def api():
    return FakeSkylight()


@pytest.fixture
def token_settings():
    return Settings(token="static-token", frame_id=FRAME_ID, timezone="America/New_York")


@pytest.fixture
def login_settings():
    return Settings(
        email="parent@example.com", password="hunter2", frame_id=FRAME_ID, timezone="America/New_York"
    )


@pytest_asyncio.fixture
async def client(api, token_settings):
    async with SkylightClient(token_settings, transport=api.transport()) as c:
        yield c


@pytest_asyncio.fixture
async def login_client(api, login_settings):
    api.add("POST", "/api/sessions", reply(200, login_body()))
    async with SkylightClient(login_settings, transport=api.transport()) as c:
        yield c


@pytest.fixture(autouse=True)
def no_skylight_env(monkeypatch):
    """Keep real credentials out of the tests."""
    for name in (
        "SKYLIGHT_EMAIL",
        "SKYLIGHT_PASSWORD",
        "SKYLIGHT_TOKEN",
        "SKYLIGHT_AUTH_TYPE",
        "SKYLIGHT_FRAME_ID",
        "SKYLIGHT_TIMEZONE",
        "SKYLIGHT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
