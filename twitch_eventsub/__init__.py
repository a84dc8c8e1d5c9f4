"""Twitch EventSub client.

Subscription catalog and condition building, authenticated Helix requests
with refresh-and-retry-once on 401, and typed decoding of websocket session
notifications.
"""

from .api import TwitchAPI
from .auth_token import (
    Credential,
    TokenClient,
    TokenLifecycle,
    authorisation_url,
    parse_authorisation_redirect,
)
from .config import ClientSettings, load_settings
from .errors import (
    AuthorisationError,
    EventSubError,
    InvalidOauthToken,
    MessageTooLong,
    NotificationDecodeError,
    TokenRequiresRefreshing,
    TransportError,
    UnhandledError,
)
from .factory import build_api
from .http import AiohttpExecutor, AuthType, TwitchHttpRequest, Validation
from .notifications import ClassifiedMessage, MessagePhase, NotificationDecoder
from .subscriptions import (
    AccountIds,
    Condition,
    CustomSubscription,
    EventSubscription,
    SubscriptionKind,
    build_condition,
    build_subscription,
)

__all__ = [
    "TwitchAPI",
    "Credential",
    "TokenClient",
    "TokenLifecycle",
    "authorisation_url",
    "parse_authorisation_redirect",
    "ClientSettings",
    "load_settings",
    "AuthorisationError",
    "EventSubError",
    "InvalidOauthToken",
    "MessageTooLong",
    "NotificationDecodeError",
    "TokenRequiresRefreshing",
    "TransportError",
    "UnhandledError",
    "build_api",
    "AiohttpExecutor",
    "AuthType",
    "TwitchHttpRequest",
    "Validation",
    "ClassifiedMessage",
    "MessagePhase",
    "NotificationDecoder",
    "AccountIds",
    "Condition",
    "CustomSubscription",
    "EventSubscription",
    "SubscriptionKind",
    "build_condition",
    "build_subscription",
]
