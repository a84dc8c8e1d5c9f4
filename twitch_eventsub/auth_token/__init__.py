from .authorisation import authorisation_url, parse_authorisation_redirect
from .client import TokenClient
from .credential import Credential
from .lifecycle import RefreshHook, TokenLifecycle

__all__ = [
    "authorisation_url",
    "parse_authorisation_redirect",
    "TokenClient",
    "Credential",
    "RefreshHook",
    "TokenLifecycle",
]
