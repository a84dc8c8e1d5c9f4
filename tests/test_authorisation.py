import pytest

from twitch_eventsub.auth_token.authorisation import (
    authorisation_url,
    parse_authorisation_redirect,
)
from twitch_eventsub.constants import TWITCH_AUTHORISE_URL
from twitch_eventsub.errors.eventsub import UnhandledError
from twitch_eventsub.subscriptions.catalog import SubscriptionKind


def test_authorisation_url_lists_scopes():
    url = authorisation_url(
        "cid",
        "http://localhost:3000",
        [SubscriptionKind.CHAT_MESSAGE, SubscriptionKind.CHANNEL_RAID, SubscriptionKind.CHANNEL_CHEER],
    )
    assert url == (
        f"{TWITCH_AUTHORISE_URL}?response_type=code&client_id=cid"
        "&redirect_uri=http%3A%2F%2Flocalhost%3A3000"
        "&scope=user:read:chat+user:write:chat+bits:read"
    )


def test_parse_bare_query():
    assert parse_authorisation_redirect("code=abc123&scope=bits%3Aread") == "abc123"


def test_parse_full_url():
    redirect = "http://localhost:3000/?code=abc123&scope=bits%3Aread&state=xyz"
    assert parse_authorisation_redirect(redirect) == "abc123"


def test_parse_request_line():
    line = "GET /?code=abc123&scope=bits%3Aread HTTP/1.1"
    assert parse_authorisation_redirect(line) == "abc123"


def test_parse_error_redirect():
    with pytest.raises(UnhandledError) as ei:
        parse_authorisation_redirect("error=access_denied&error_description=The+user+denied")
    assert ei.value.operation_type == "authorise"


def test_parse_missing_code():
    with pytest.raises(UnhandledError):
        parse_authorisation_redirect("http://localhost:3000/?scope=bits%3Aread")
