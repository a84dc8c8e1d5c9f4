"""Authenticated request description shared by the executor and token lifecycle."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any
from urllib.parse import quote, urlencode

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"


class AuthType(str, Enum):
    """Authorization scheme: Bearer for Helix calls, OAuth for legacy validation."""

    BEARER = "Bearer"
    OAUTH = "OAuth"


def build_query_url(url: str, params: Iterable[tuple[str, str]]) -> str:
    """Append ``key=value`` pairs to ``url`` in insertion order.

    The first pair is preceded by ``?`` and the rest by ``&``. Values are
    percent-encoded; no sorting is applied.

    Example:
        >>> build_query_url("https://x/y", [("b", "2"), ("a", "1")])
        'https://x/y?b=2&a=1'
    """
    query = "&".join(f"{key}={quote(str(value), safe='')}" for key, value in params)
    return f"{url}?{query}" if query else url


@dataclass
class TwitchHttpRequest:
    """One HTTP call against Twitch, ready to execute.

    Attributes:
        url: Full request URL including any query string.
        method: HTTP method.
        token: Token placed in the Authorization header, None for
            unauthenticated calls such as token exchange.
        auth_type: Authorization scheme.
        client_id: Value of the Client-Id header, if any.
        body: Encoded request body, if any.
        content_type: Content type of ``body``.
    """

    url: str
    method: str = "GET"
    token: str | None = None
    auth_type: AuthType = AuthType.BEARER
    client_id: str | None = None
    body: str | None = None
    content_type: str | None = None

    @classmethod
    def json_post(
        cls,
        url: str,
        payload: Mapping[str, Any],
        *,
        token: str,
        client_id: str,
    ) -> TwitchHttpRequest:
        return cls(
            url=url,
            method="POST",
            token=token,
            client_id=client_id,
            body=json.dumps(payload, separators=(",", ":")),
            content_type=CONTENT_TYPE_JSON,
        )

    @classmethod
    def form_post(cls, url: str, form: Iterable[tuple[str, str]]) -> TwitchHttpRequest:
        return cls(
            url=url,
            method="POST",
            body=urlencode(list(form)),
            content_type=CONTENT_TYPE_FORM,
        )

    @classmethod
    def delete(cls, url: str, *, token: str, client_id: str) -> TwitchHttpRequest:
        return cls(url=url, method="DELETE", token=token, client_id=client_id)

    def headers(self) -> dict[str, str]:
        """Compose request headers.

        At most one Authorization and one Client-Id header; Content-Type only
        when there is a body.
        """
        headers: dict[str, str] = {}
        if self.token is not None:
            headers["Authorization"] = f"{self.auth_type.value} {self.token}"
        if self.client_id:
            headers["Client-Id"] = self.client_id
        if self.body is not None and self.content_type:
            headers["Content-Type"] = self.content_type
        return headers

    def update_token(self, new_token: str) -> None:
        """Replace the Authorization token in place, keeping its scheme."""
        self.token = new_token

    def describe(self) -> str:
        """Return ``METHOD url`` without the query string, for logs."""
        return f"{self.method} {self.url.split('?', 1)[0]}"
