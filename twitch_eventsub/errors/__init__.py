from .eventsub import (
    AuthorisationError,
    EventSubError,
    InvalidOauthToken,
    MessageTooLong,
    NotificationDecodeError,
    TokenRequiresRefreshing,
    TransportError,
    UnhandledError,
)

__all__ = [
    "EventSubError",
    "MessageTooLong",
    "TokenRequiresRefreshing",
    "InvalidOauthToken",
    "AuthorisationError",
    "TransportError",
    "UnhandledError",
    "NotificationDecodeError",
]
