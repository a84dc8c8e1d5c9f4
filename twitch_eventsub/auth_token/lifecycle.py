"""Refresh-and-retry-once execution of authenticated requests.

A request is executed with the current access token. If Twitch answers 401
the credential is refreshed once, the request's Authorization header is
updated in place and the request is replayed exactly once. A second 401, or a
failed refresh, ends the operation with InvalidOauthToken; nothing loops.

Refreshes are serialised with an asyncio.Lock. When several requests fail
with 401 concurrently only the first refreshes; the others find the
credential already replaced and just replay. A failed refresh is remembered
for the credential it was attempted with, so waiters fail without refreshing
again.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable

from ..errors.eventsub import (
    AuthorisationError,
    InvalidOauthToken,
    TokenRequiresRefreshing,
    TransportError,
)
from ..http.executor import RequestExecutor
from ..http.request import TwitchHttpRequest
from ..logs import logger
from .client import TokenClient
from .credential import Credential

RefreshHook = Callable[[Credential], Awaitable[None] | None]


class TokenLifecycle:
    """Runs requests through an executor, refreshing the credential on 401.

    Attributes:
        refresh_count (int): Number of successful refreshes performed.
    """

    def __init__(
        self,
        executor: RequestExecutor,
        token_client: TokenClient,
        credential: Credential,
        on_refresh: RefreshHook | None = None,
    ) -> None:
        """Initialize the lifecycle.

        Args:
            executor: Executor for the actual round trips.
            token_client: Client used for the refresh-token exchange.
            credential: Initial credential.
            on_refresh: Optional hook called with every new credential, e.g.
                to persist it. May be sync or async.
        """
        self._executor = executor
        self._token_client = token_client
        self._credential = credential
        self._on_refresh = on_refresh
        self._refresh_lock = asyncio.Lock()
        # Credential whose refresh failed, and why; not refreshed again.
        self._failed_for: Credential | None = None
        self._failure: Exception | None = None
        self.refresh_count = 0

    @property
    def credential(self) -> Credential:
        return self._credential

    async def run(self, request: TwitchHttpRequest) -> str:
        """Execute ``request``, replaying it once after a refresh on 401.

        Returns:
            The response body.

        Raises:
            InvalidOauthToken: If the refresh fails or the replay is rejected again.
            TransportError: On non-auth failures (never retried).
        """
        sent_with = self._credential
        authenticated = request.token is not None
        if authenticated:
            request.update_token(sent_with.access_token)
        try:
            return await self._executor.execute(request)
        except TokenRequiresRefreshing:
            logger.log_event(
                "token", "unauthorized", level=logging.WARNING, request=request.describe()
            )

        await self._refresh_after_401(sent_with, request)
        if authenticated:
            request.update_token(self._credential.access_token)
        try:
            body = await self._executor.execute(request)
        except TokenRequiresRefreshing as e:
            logger.log_event(
                "token", "replay_rejected", level=logging.ERROR, request=request.describe()
            )
            raise InvalidOauthToken(
                f"{request.describe()} still unauthorized after token refresh",
                request=request,
                operation_type="replay",
            ) from e
        logger.log_event("token", "replay_ok", level=logging.DEBUG, request=request.describe())
        return body

    async def _refresh_after_401(
        self, sent_with: Credential, request: TwitchHttpRequest
    ) -> None:
        async with self._refresh_lock:
            if self._credential is not sent_with:
                logger.log_event("token", "refresh_shared", level=logging.DEBUG)
                return
            if self._failed_for is sent_with:
                raise InvalidOauthToken(
                    f"Token refresh already failed: {self._failure}",
                    request=request,
                    operation_type="refresh",
                ) from self._failure
            try:
                fresh = await self._token_client.refresh(sent_with.refresh_token)
            except (AuthorisationError, InvalidOauthToken, TransportError) as e:
                self._failed_for = sent_with
                self._failure = e
                logger.log_event(
                    "token", "refresh_failed", level=logging.ERROR, error=type(e).__name__
                )
                raise InvalidOauthToken(
                    f"Token refresh failed: {e}",
                    request=request,
                    operation_type="refresh",
                ) from e
            self._credential = fresh
            self.refresh_count += 1
            if self._on_refresh is not None:
                result = self._on_refresh(fresh)
                if inspect.isawaitable(result):
                    await result
