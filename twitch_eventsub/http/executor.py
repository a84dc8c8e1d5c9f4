"""Execute one TwitchHttpRequest and classify its outcome.

Only one round trip happens per ``execute`` call. Retrying is left to
:class:`~twitch_eventsub.auth_token.lifecycle.TokenLifecycle`, which replays
a request once after a 401.
"""

from __future__ import annotations

import logging
from typing import Protocol

import aiohttp
from pydantic import ValidationError

from ..constants import HTTP_REQUEST_TIMEOUT_SECONDS
from ..errors.eventsub import EventSubError, TokenRequiresRefreshing, TransportError
from ..logs import logger
from .request import TwitchHttpRequest
from .responses import Validation


class RequestExecutor(Protocol):
    """Blocking-per-call primitive: run one request, return its body or raise."""

    async def execute(self, request: TwitchHttpRequest) -> str:
        """Run ``request`` and return the response body.

        Raises:
            TokenRequiresRefreshing: Twitch answered with a 401 error body.
            TransportError: Any other HTTP or network failure.
        """
        ...


def _parse_validation(body: str) -> Validation | None:
    try:
        return Validation.model_validate_json(body)
    except ValidationError:
        return None


def classify_failure(
    request: TwitchHttpRequest, status: int, body: str
) -> EventSubError:
    """Map a non-2xx response to the matching error.

    A body that parses as an error Validation with status 401 means the
    token needs refreshing; everything else is a transport error.
    """
    validation = _parse_validation(body)
    if validation is not None and validation.is_error():
        if validation.status == 401:
            return TokenRequiresRefreshing(
                f"{request.describe()} unauthorized: {validation.error_msg()}",
                request=request,
                operation_type="execute",
                validation=validation,
            )
        detail = validation.error_msg()
    else:
        detail = f"HTTP {status}"
    return TransportError(
        f"{request.describe()} failed: {detail}",
        request=request,
        operation_type="execute",
        status=status,
        body=body,
    )


class AiohttpExecutor:
    """RequestExecutor backed by an aiohttp session.

    Args:
        session (aiohttp.ClientSession): Session used for every request.
        timeout (float): Total timeout in seconds for one round trip.

    Raises:
        ValueError: If session is not provided.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        timeout: float = HTTP_REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        if not session:
            raise ValueError("aiohttp session required")
        self._session = session
        self._timeout = timeout

    async def execute(self, request: TwitchHttpRequest) -> str:
        logger.log_event(
            "http", "request", level=logging.DEBUG, request=request.describe()
        )
        try:
            async with self._session.request(
                request.method,
                request.url,
                headers=request.headers(),
                data=request.body,
                timeout=aiohttp.ClientTimeout(total=self._timeout),
            ) as resp:
                status = resp.status
                body = await resp.text(errors="replace")
        except TimeoutError as e:
            raise TransportError(
                f"{request.describe()} timed out",
                request=request,
                operation_type="execute",
            ) from e
        except aiohttp.ClientError as e:
            raise TransportError(
                f"{request.describe()} network error: {e}",
                request=request,
                operation_type="execute",
            ) from e

        if 200 <= status < 300:
            logger.log_event(
                "http",
                "response",
                level=logging.DEBUG,
                request=request.describe(),
                status=status,
            )
            return body

        error = classify_failure(request, status, body)
        logger.log_event(
            "http",
            "failure",
            level=logging.WARNING,
            request=request.describe(),
            status=status,
            error=type(error).__name__,
        )
        raise error
