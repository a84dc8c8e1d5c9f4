"""EventSub error hierarchy for authenticated requests and notification decoding.

Every error carries the request it originated from (when there is one) and an
operation type, so callers can retry or report without re-deriving context.

Only the single refresh-and-replay performed by TokenLifecycle is automatic;
everything else below is surfaced to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..http.request import TwitchHttpRequest
    from ..http.responses import Validation


class EventSubError(Exception):
    """Base exception for all EventSub client errors.

    Args:
        message (str): Error message.
        request (TwitchHttpRequest | None): Request that produced the error, if any.
        operation_type (str | None): Operation being performed (e.g. 'subscribe', 'refresh').

    Example:
        >>> raise EventSubError("Generic error", operation_type="subscribe")
    """

    def __init__(
        self,
        message: str,
        request: TwitchHttpRequest | None = None,
        operation_type: str | None = None,
    ) -> None:
        super().__init__(message)
        self.request = request
        self.operation_type = operation_type


class MessageTooLong(EventSubError):
    """Raised when a chat message exceeds the Helix length limit.

    No request is built or sent when this is raised.
    """

    def __init__(self, length: int, limit: int) -> None:
        super().__init__(
            f"Chat message is {length} bytes, limit is {limit}",
            operation_type="send_chat_message",
        )
        self.length = length
        self.limit = limit


class TokenRequiresRefreshing(EventSubError):
    """Raised when Twitch answers 401 for a request.

    Carries the request so it can be replayed once with a refreshed token,
    and the parsed error body.
    """

    def __init__(
        self,
        message: str,
        request: TwitchHttpRequest | None = None,
        operation_type: str | None = None,
        *,
        validation: Validation | None = None,
    ) -> None:
        super().__init__(message, request=request, operation_type=operation_type)
        self.validation = validation


class InvalidOauthToken(EventSubError):
    """Raised when a token stays invalid after refreshing, or the refresh itself fails.

    Fatal to the current operation; the caller must re-authorise.
    """


class AuthorisationError(EventSubError):
    """Raised when a token exchange response cannot be parsed."""


class TransportError(EventSubError):
    """Raised for non-auth HTTP failures and network errors.

    Args:
        message (str): Error message.
        status (int | None): HTTP status, None for network level failures.
        body (str | None): Raw response body, if any.
    """

    def __init__(
        self,
        message: str,
        request: TwitchHttpRequest | None = None,
        operation_type: str | None = None,
        *,
        status: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message, request=request, operation_type=operation_type)
        self.status = status
        self.body = body


class UnhandledError(EventSubError):
    """Raised when the authorisation code flow returns an error indicator."""


class NotificationDecodeError(EventSubError):
    """Raised when an inbound envelope or its event payload cannot be decoded."""
