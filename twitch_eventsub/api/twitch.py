"""Asynchronous Twitch Helix client for EventSub subscriptions and chat moderation.

Every call goes through a TokenLifecycle, so a request rejected with 401 is
replayed once after refreshing the credential. Prefer adding focused methods
here over building raw requests elsewhere.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from ..auth_token.lifecycle import TokenLifecycle
from ..constants import (
    MAX_CHAT_MESSAGE_LENGTH,
    SEND_MESSAGE_URL,
    TWITCH_BAN_URL,
    TWITCH_DELETE_MESSAGE_URL,
    TWITCH_SUBSCRIPTION_URL,
)
from ..errors.eventsub import MessageTooLong, TransportError
from ..http.request import TwitchHttpRequest, build_query_url
from ..logs import logger
from ..subscriptions.catalog import AnyKind, is_subscribable
from ..subscriptions.condition import AccountIds, build_subscription
from ..subscriptions.models import EventSubscription
from .models import SendMessage, SendTimeoutRequest, TimeoutRequestData


class TwitchAPI:
    """High level Helix operations for one broadcaster account.

    Attributes:
        client_id (str): Twitch application client ID.
        account_ids (AccountIds): Default broadcaster/moderator/user ids.
    """

    def __init__(
        self, lifecycle: TokenLifecycle, client_id: str, account_ids: AccountIds
    ) -> None:
        if not client_id:
            raise ValueError("client_id required")
        self._lifecycle = lifecycle
        self.client_id = client_id
        self.account_ids = account_ids

    @property
    def _token(self) -> str:
        return self._lifecycle.credential.access_token

    async def create_subscription(self, subscription: EventSubscription) -> dict[str, Any]:
        """Create one EventSub subscription.

        Returns:
            The decoded Helix response (``{"data": [...], ...}``).

        Raises:
            InvalidOauthToken: If the token stays invalid after a refresh.
            TransportError: On any other failure, e.g. a missing scope (403)
                or a duplicate subscription (409).
        """
        request = TwitchHttpRequest.json_post(
            TWITCH_SUBSCRIPTION_URL,
            subscription.to_wire(),
            token=self._token,
            client_id=self.client_id,
        )
        data = self._decode(await self._lifecycle.run(request), request)
        logger.log_event(
            "subscription",
            "created",
            broadcaster=self.account_ids.broadcaster_id,
            tag=subscription.wire_tag,
            version=subscription.version,
            subscription_id=self._subscription_id(data),
        )
        return data

    async def subscribe(
        self, kinds: Iterable[AnyKind], session_id: str
    ) -> list[dict[str, Any]]:
        """Create a subscription for every subscribable kind on ``session_id``.

        Permission-only kinds are skipped. Stops at the first failure.
        """
        results: list[dict[str, Any]] = []
        for kind in kinds:
            if not is_subscribable(kind):
                logger.log_event(
                    "subscription",
                    "skipped",
                    level=logging.DEBUG,
                    broadcaster=self.account_ids.broadcaster_id,
                    kind=str(kind),
                )
                continue
            subscription = build_subscription(kind, self.account_ids, session_id)
            results.append(await self.create_subscription(subscription))
        return results

    async def send_chat_message(
        self,
        message: str,
        *,
        broadcaster_id: str | None = None,
        sender_id: str | None = None,
        reply_parent_message_id: str | None = None,
    ) -> dict[str, Any]:
        """Send a chat message, optionally as a reply.

        The sender defaults to the broadcaster.

        Raises:
            MessageTooLong: If ``message`` exceeds the limit in UTF-8 bytes.
                Nothing is sent.
        """
        broadcaster = broadcaster_id or self.account_ids.broadcaster_id
        length = len(message.encode("utf-8"))
        if length > MAX_CHAT_MESSAGE_LENGTH:
            logger.log_event(
                "chat",
                "message_too_long",
                level=logging.WARNING,
                broadcaster=broadcaster,
                length=length,
            )
            raise MessageTooLong(length, MAX_CHAT_MESSAGE_LENGTH)

        body = SendMessage(
            broadcaster_id=broadcaster,
            sender_id=sender_id or broadcaster,
            message=message,
            reply_parent_message_id=reply_parent_message_id,
        )
        request = TwitchHttpRequest.json_post(
            SEND_MESSAGE_URL,
            body.model_dump(exclude_none=True),
            token=self._token,
            client_id=self.client_id,
        )
        return self._decode(await self._lifecycle.run(request), request)

    async def timeout_user(
        self,
        user_id: str,
        duration_secs: int,
        reason: str,
        *,
        broadcaster_id: str | None = None,
        moderator_id: str | None = None,
    ) -> dict[str, Any]:
        """Time a user out of the broadcaster's chat for ``duration_secs``."""
        broadcaster = broadcaster_id or self.account_ids.broadcaster_id
        url = build_query_url(
            TWITCH_BAN_URL,
            [
                ("broadcaster_id", broadcaster),
                ("moderator_id", moderator_id or self.account_ids.moderator),
            ],
        )
        body = SendTimeoutRequest(
            data=TimeoutRequestData(user_id=user_id, duration=duration_secs, reason=reason)
        )
        request = TwitchHttpRequest.json_post(
            url, body.model_dump(), token=self._token, client_id=self.client_id
        )
        data = self._decode(await self._lifecycle.run(request), request)
        logger.log_event(
            "moderation",
            "timeout",
            broadcaster=broadcaster,
            user_id=user_id,
            duration=duration_secs,
        )
        return data

    async def delete_message(
        self,
        message_id: str,
        *,
        broadcaster_id: str | None = None,
        moderator_id: str | None = None,
    ) -> None:
        """Delete a single chat message."""
        broadcaster = broadcaster_id or self.account_ids.broadcaster_id
        url = build_query_url(
            TWITCH_DELETE_MESSAGE_URL,
            [
                ("broadcaster_id", broadcaster),
                ("moderator_id", moderator_id or self.account_ids.moderator),
                ("message_id", message_id),
            ],
        )
        request = TwitchHttpRequest.delete(url, token=self._token, client_id=self.client_id)
        await self._lifecycle.run(request)
        logger.log_event(
            "moderation", "message_deleted", broadcaster=broadcaster, message_id=message_id
        )

    # ---- internal helpers ----
    @staticmethod
    def _decode(body: str, request: TwitchHttpRequest) -> dict[str, Any]:
        """Decode a JSON object body; an empty body (204) decodes to ``{}``."""
        if not body.strip():
            return {}
        try:
            data = json.loads(body)
        except ValueError as e:
            raise TransportError(
                f"{request.describe()} returned invalid JSON",
                request=request,
                operation_type="decode_response",
                body=body,
            ) from e
        if not isinstance(data, dict):
            raise TransportError(
                f"{request.describe()} returned a non-object JSON body",
                request=request,
                operation_type="decode_response",
                body=body,
            )
        return data

    @staticmethod
    def _subscription_id(data: dict[str, Any]) -> str | None:
        rows = data.get("data")
        if isinstance(rows, list) and rows and isinstance(rows[0], dict):
            sub_id = rows[0].get("id")
            if isinstance(sub_id, str):
                return sub_id
        return None
