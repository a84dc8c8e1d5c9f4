"""Fake collaborators for executor, token client and aiohttp session."""

from __future__ import annotations

import asyncio
import json
from typing import Any

from twitch_eventsub.auth_token.credential import Credential
from twitch_eventsub.errors.eventsub import TokenRequiresRefreshing, TransportError
from twitch_eventsub.http.request import TwitchHttpRequest
from twitch_eventsub.http.responses import Validation

# Outcome sentinel: the fake executor answers with a 401 error body.
UNAUTHORIZED = object()


class FakeExecutor:
    """Executor returning scripted outcomes in order; the last one repeats.

    Outcomes are response bodies (str), ``UNAUTHORIZED``, or exceptions.
    """

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes) or [""]
        self.calls: list[TwitchHttpRequest] = []
        self.auth_headers: list[str | None] = []
        self.snapshots: list[dict[str, str]] = []

    async def execute(self, request: TwitchHttpRequest) -> str:
        self.calls.append(request)
        headers = request.headers()
        self.snapshots.append(headers)
        self.auth_headers.append(headers.get("Authorization"))
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if outcome is UNAUTHORIZED:
            raise TokenRequiresRefreshing(
                "unauthorized",
                request=request,
                validation=Validation(status=401, message="Invalid OAuth token"),
            )
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class TokenAwareExecutor:
    """Executor that rejects a given access token and accepts any other."""

    def __init__(self, rejected_token: str, body: str = "{}") -> None:
        self.rejected_token = rejected_token
        self.body = body
        self.calls: list[str | None] = []

    async def execute(self, request: TwitchHttpRequest) -> str:
        await asyncio.sleep(0)
        self.calls.append(request.token)
        if request.token == self.rejected_token:
            raise TokenRequiresRefreshing("unauthorized", request=request)
        return self.body


class FakeTokenClient:
    """Token client handing out numbered credentials."""

    def __init__(self, fail: Exception | None = None) -> None:
        self.fail = fail
        self.refresh_calls: list[str] = []

    async def refresh(self, refresh_token: str) -> Credential:
        await asyncio.sleep(0)
        self.refresh_calls.append(refresh_token)
        if self.fail is not None:
            raise self.fail
        n = len(self.refresh_calls)
        return Credential(f"refreshed-access-{n}", f"refreshed-refresh-{n}", 14124)


def transport_failure(status: int = 500) -> TransportError:
    return TransportError("boom", status=status)


class FakeResp:
    def __init__(self, status: int, payload: Any = None, raise_exception: Exception | None = None):
        self.status = status
        if payload is None:
            self._body = b""
        elif isinstance(payload, bytes):
            self._body = payload
        elif isinstance(payload, str):
            self._body = payload.encode()
        else:
            self._body = json.dumps(payload).encode()
        self.raise_exception = raise_exception

    async def __aenter__(self):
        if self.raise_exception:
            raise self.raise_exception
        return self

    async def __aexit__(self, _exc_type, _exc, _tb):
        return False

    async def text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        # Simulate asynchronous boundary
        await asyncio.sleep(0)
        return self._body.decode(encoding, errors)


class FakeSession:
    def __init__(self, *responses: FakeResp) -> None:
        self.responses = list(responses)
        self.requests: list[dict[str, Any]] = []

    def request(self, method, url, headers=None, data=None, timeout=None):
        self.requests.append(
            {"method": method, "url": url, "headers": headers, "data": data, "timeout": timeout}
        )
        return self.responses.pop(0)
