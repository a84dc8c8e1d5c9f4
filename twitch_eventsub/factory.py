"""Wiring of executor, token client, lifecycle and API from settings."""

from __future__ import annotations

import aiohttp

from .api.twitch import TwitchAPI
from .auth_token.client import TokenClient
from .auth_token.credential import Credential
from .auth_token.lifecycle import RefreshHook, TokenLifecycle
from .config import ClientSettings
from .http.executor import AiohttpExecutor


def build_api(
    settings: ClientSettings,
    credential: Credential,
    session: aiohttp.ClientSession,
    on_refresh: RefreshHook | None = None,
) -> TwitchAPI:
    """Build a TwitchAPI sharing one executor for Helix and token calls.

    Args:
        settings: Application credentials and account ids.
        credential: Current user credential.
        session: aiohttp session owned by the caller.
        on_refresh: Optional hook receiving every refreshed credential.
    """
    executor = AiohttpExecutor(session)
    token_client = TokenClient(settings.client_id, settings.client_secret, executor)
    lifecycle = TokenLifecycle(executor, token_client, credential, on_refresh=on_refresh)
    return TwitchAPI(lifecycle, settings.client_id, settings.account_ids())
