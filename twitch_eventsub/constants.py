"""
Configuration constants for the Twitch EventSub client

This module contains the endpoints and tunables used throughout the library.
Each tunable can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Attempts to parse the environment variable as a float. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# Endpoints
TWITCH_AUTHORISE_URL = "https://id.twitch.tv/oauth2/authorize"
TWITCH_TOKEN_URL = "https://id.twitch.tv/oauth2/token"
TWITCH_VALIDATION_URL = "https://id.twitch.tv/oauth2/validate"
TWITCH_HELIX_URL = "https://api.twitch.tv/helix"
TWITCH_SUBSCRIPTION_URL = f"{TWITCH_HELIX_URL}/eventsub/subscriptions"
SEND_MESSAGE_URL = f"{TWITCH_HELIX_URL}/chat/messages"
TWITCH_BAN_URL = f"{TWITCH_HELIX_URL}/moderation/bans"
TWITCH_DELETE_MESSAGE_URL = f"{TWITCH_HELIX_URL}/moderation/chat"

# Token expiry bookkeeping
TOKEN_REFRESH_SAFETY_BUFFER_SECONDS = _get_env_int(
    "TOKEN_REFRESH_SAFETY_BUFFER_SECONDS", 300
)  # Subtracted from expires_in so a token is treated as expired slightly early

# HTTP
HTTP_REQUEST_TIMEOUT_SECONDS = _get_env_float(
    "HTTP_REQUEST_TIMEOUT_SECONDS", 30.0
)  # Total timeout for a single Helix / OAuth round trip

# Chat
MAX_CHAT_MESSAGE_LENGTH = _get_env_int(
    "MAX_CHAT_MESSAGE_LENGTH", 500
)  # Helix rejects longer messages; checked in UTF-8 bytes before sending

# EventSub transport
EVENTSUB_TRANSPORT_METHOD = "websocket"
