from .executor import AiohttpExecutor, RequestExecutor, classify_failure
from .request import AuthType, TwitchHttpRequest, build_query_url
from .responses import TokenResponse, Validation

__all__ = [
    "AiohttpExecutor",
    "RequestExecutor",
    "classify_failure",
    "AuthType",
    "TwitchHttpRequest",
    "build_query_url",
    "TokenResponse",
    "Validation",
]
