from .models import SendMessage, SendTimeoutRequest, TimeoutRequestData
from .twitch import TwitchAPI

__all__ = ["SendMessage", "SendTimeoutRequest", "TimeoutRequestData", "TwitchAPI"]
