"""Authorisation code flow helpers.

Opening the browser and capturing the redirect happen outside this package;
these helpers only build the authorise URL and read the captured redirect.
"""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import parse_qsl, quote

from ..constants import TWITCH_AUTHORISE_URL
from ..errors.eventsub import UnhandledError
from ..subscriptions.catalog import AnyKind, scopes_for


def authorisation_url(client_id: str, redirect_url: str, kinds: Iterable[AnyKind]) -> str:
    """Build the URL a user opens to grant the scopes ``kinds`` need.

    Scopes are ``+``-joined as produced by :func:`scopes_for`.
    """
    return (
        f"{TWITCH_AUTHORISE_URL}?response_type=code"
        f"&client_id={quote(client_id, safe='')}"
        f"&redirect_uri={quote(redirect_url, safe='')}"
        f"&scope={scopes_for(kinds)}"
    )


def parse_authorisation_redirect(response: str) -> str:
    """Extract the authorisation code from a captured redirect.

    Accepts either the bare query string (``code=...&scope=...``) or a full
    URL / request line containing it.

    Raises:
        UnhandledError: If the redirect reports an error or carries no code.
    """
    if "error" in response:
        raise UnhandledError(response, operation_type="authorise")
    query = response.split("?", 1)[1] if "?" in response else response
    query = query.split(" ", 1)[0].split("#", 1)[0]
    for key, value in parse_qsl(query):
        if key == "code" and value:
            return value
    raise UnhandledError(
        f"No authorisation code in redirect: {response}", operation_type="authorise"
    )
