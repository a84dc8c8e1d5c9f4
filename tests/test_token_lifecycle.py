"""Refresh-and-replay-once behaviour of TokenLifecycle."""

from __future__ import annotations

import asyncio

import pytest

from tests.fixtures.fakes import (
    UNAUTHORIZED,
    FakeExecutor,
    FakeTokenClient,
    TokenAwareExecutor,
    transport_failure,
)
from twitch_eventsub.auth_token.lifecycle import TokenLifecycle
from twitch_eventsub.errors.eventsub import (
    AuthorisationError,
    InvalidOauthToken,
    TransportError,
)
from twitch_eventsub.http.request import TwitchHttpRequest


def _request() -> TwitchHttpRequest:
    return TwitchHttpRequest.json_post(
        "https://api.twitch.tv/helix/chat/messages",
        {"message": "hi"},
        token="stale",
        client_id="cid",
    )


@pytest.mark.asyncio
async def test_success_without_refresh(credential):
    executor = FakeExecutor('{"ok": true}')
    token_client = FakeTokenClient()
    lifecycle = TokenLifecycle(executor, token_client, credential)

    assert await lifecycle.run(_request()) == '{"ok": true}'
    assert executor.auth_headers == ["Bearer initial-access"]
    assert token_client.refresh_calls == []
    assert lifecycle.refresh_count == 0


@pytest.mark.asyncio
async def test_401_then_success_refreshes_once_and_replays(credential):
    executor = FakeExecutor(UNAUTHORIZED, "{}")
    token_client = FakeTokenClient()
    lifecycle = TokenLifecycle(executor, token_client, credential)

    assert await lifecycle.run(_request()) == "{}"
    assert token_client.refresh_calls == ["initial-refresh"]
    assert len(executor.calls) == 2
    assert executor.auth_headers == ["Bearer initial-access", "Bearer refreshed-access-1"]
    assert lifecycle.credential.access_token == "refreshed-access-1"
    assert lifecycle.refresh_count == 1


@pytest.mark.asyncio
async def test_replay_keeps_method_url_and_body(credential):
    executor = FakeExecutor(UNAUTHORIZED, "{}")
    lifecycle = TokenLifecycle(executor, FakeTokenClient(), credential)
    await lifecycle.run(_request())

    first, second = executor.snapshots
    assert {k: v for k, v in first.items() if k != "Authorization"} == {
        k: v for k, v in second.items() if k != "Authorization"
    }
    assert executor.calls[0].body == '{"message":"hi"}'


@pytest.mark.asyncio
async def test_persistent_401_refreshes_exactly_once(credential):
    executor = FakeExecutor(UNAUTHORIZED)
    token_client = FakeTokenClient()
    lifecycle = TokenLifecycle(executor, token_client, credential)

    with pytest.raises(InvalidOauthToken) as ei:
        await lifecycle.run(_request())
    assert ei.value.operation_type == "replay"
    assert len(token_client.refresh_calls) == 1
    assert len(executor.calls) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "failure",
    [
        AuthorisationError("malformed"),
        InvalidOauthToken("revoked"),
        TransportError("down", status=400),
    ],
)
async def test_refresh_failure_is_invalid_token(credential, failure):
    executor = FakeExecutor(UNAUTHORIZED, "{}")
    lifecycle = TokenLifecycle(executor, FakeTokenClient(fail=failure), credential)

    with pytest.raises(InvalidOauthToken) as ei:
        await lifecycle.run(_request())
    assert ei.value.operation_type == "refresh"
    assert ei.value.__cause__ is failure
    # No replay after a failed refresh
    assert len(executor.calls) == 1
    assert lifecycle.credential is credential


@pytest.mark.asyncio
async def test_transport_error_is_not_retried(credential):
    executor = FakeExecutor(transport_failure(503))
    token_client = FakeTokenClient()
    lifecycle = TokenLifecycle(executor, token_client, credential)

    with pytest.raises(TransportError):
        await lifecycle.run(_request())
    assert len(executor.calls) == 1
    assert token_client.refresh_calls == []


@pytest.mark.asyncio
async def test_transport_error_on_replay_propagates(credential):
    executor = FakeExecutor(UNAUTHORIZED, transport_failure(500))
    lifecycle = TokenLifecycle(executor, FakeTokenClient(), credential)

    with pytest.raises(TransportError):
        await lifecycle.run(_request())
    assert lifecycle.refresh_count == 1


@pytest.mark.asyncio
async def test_concurrent_401s_share_one_refresh(credential):
    executor = TokenAwareExecutor(rejected_token="initial-access")
    token_client = FakeTokenClient()
    lifecycle = TokenLifecycle(executor, token_client, credential)

    results = await asyncio.gather(*(lifecycle.run(_request()) for _ in range(5)))

    assert results == ["{}"] * 5
    assert len(token_client.refresh_calls) == 1
    assert lifecycle.refresh_count == 1
    assert executor.calls.count("refreshed-access-1") == 5


@pytest.mark.asyncio
async def test_concurrent_401s_share_one_failed_refresh(credential):
    executor = TokenAwareExecutor(rejected_token="initial-access")
    token_client = FakeTokenClient(fail=TransportError("down", status=400))
    lifecycle = TokenLifecycle(executor, token_client, credential)

    results = await asyncio.gather(
        *(lifecycle.run(_request()) for _ in range(3)), return_exceptions=True
    )

    assert all(isinstance(r, InvalidOauthToken) for r in results)
    assert {r.operation_type for r in results} == {"refresh"}
    assert len(token_client.refresh_calls) == 1
    assert lifecycle.refresh_count == 0

    with pytest.raises(InvalidOauthToken):
        await lifecycle.run(_request())
    assert len(token_client.refresh_calls) == 1


@pytest.mark.asyncio
async def test_unauthenticated_request_gets_no_token(credential):
    executor = FakeExecutor(UNAUTHORIZED, "{}")
    lifecycle = TokenLifecycle(executor, FakeTokenClient(), credential)
    request = TwitchHttpRequest.form_post(
        "https://id.twitch.tv/oauth2/token", [("grant_type", "refresh_token")]
    )

    assert await lifecycle.run(request) == "{}"
    assert request.token is None
    assert executor.auth_headers == [None, None]


@pytest.mark.asyncio
async def test_sync_refresh_hook(credential):
    seen = []
    lifecycle = TokenLifecycle(
        FakeExecutor(UNAUTHORIZED, "{}"), FakeTokenClient(), credential, on_refresh=seen.append
    )
    await lifecycle.run(_request())
    assert [c.access_token for c in seen] == ["refreshed-access-1"]


@pytest.mark.asyncio
async def test_async_refresh_hook(credential):
    seen = []

    async def persist(new_credential):
        await asyncio.sleep(0)
        seen.append(new_credential.refresh_token)

    lifecycle = TokenLifecycle(
        FakeExecutor(UNAUTHORIZED, "{}"), FakeTokenClient(), credential, on_refresh=persist
    )
    await lifecycle.run(_request())
    assert seen == ["refreshed-refresh-1"]
