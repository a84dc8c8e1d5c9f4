from datetime import UTC, datetime, timedelta

import pytest

from tests.fixtures.token_fixtures import MOCK_TOKEN_RESPONSE, MOCK_TOKEN_RESPONSE_NO_REFRESH
from twitch_eventsub.auth_token.credential import Credential
from twitch_eventsub.constants import TOKEN_REFRESH_SAFETY_BUFFER_SECONDS
from twitch_eventsub.errors.eventsub import AuthorisationError
from twitch_eventsub.http.responses import TokenResponse

T0 = datetime(2024, 1, 1, tzinfo=UTC)


def test_expiry_includes_safety_buffer():
    cred = Credential("a", "r", 3600, obtained_at=T0)
    assert cred.expires_at == T0 + timedelta(seconds=3600 - TOKEN_REFRESH_SAFETY_BUFFER_SECONDS)
    assert not cred.is_expired(T0)
    assert cred.is_expired(cred.expires_at)


def test_short_lifetime_is_immediately_expired():
    cred = Credential("a", "r", TOKEN_REFRESH_SAFETY_BUFFER_SECONDS - 1, obtained_at=T0)
    assert cred.is_expired(T0)


def test_from_token_response():
    cred = Credential.from_token_response(TokenResponse(**MOCK_TOKEN_RESPONSE))
    assert cred.access_token == "new_mock_access_token_789"
    assert cred.refresh_token == "new_mock_refresh_token_012"
    assert cred.expires_in == 14124.0


def test_from_token_response_fallback_refresh_token():
    resp = TokenResponse(**MOCK_TOKEN_RESPONSE_NO_REFRESH)
    assert Credential.from_token_response(resp, "kept").refresh_token == "kept"
    with pytest.raises(AuthorisationError):
        Credential.from_token_response(resp)


def test_repr_masks_tokens():
    text = repr(Credential("secret-access", "secret-refresh", 60, obtained_at=T0))
    assert "secret" not in text
    assert "***" in text


def test_credential_is_immutable():
    cred = Credential("a", "r", 60)
    with pytest.raises(AttributeError):
        cred.access_token = "b"  # type: ignore[misc]
