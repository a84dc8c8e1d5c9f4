import os
from datetime import UTC, datetime

import pytest

# Keep concise log output regardless of the developer's shell
os.environ.pop("DEBUG", None)

from twitch_eventsub.auth_token.credential import Credential  # noqa: E402
from twitch_eventsub.logs.event_catalog import reload_event_templates  # noqa: E402
from twitch_eventsub.notifications.decoder import NotificationDecoder  # noqa: E402
from twitch_eventsub.subscriptions.condition import AccountIds  # noqa: E402

FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def account_ids() -> AccountIds:
    return AccountIds(broadcaster_id="1337", moderator_id="42", user_id="7")


@pytest.fixture
def broadcaster_only_ids() -> AccountIds:
    return AccountIds(broadcaster_id="1337")


@pytest.fixture
def credential() -> Credential:
    return Credential(
        access_token="initial-access",
        refresh_token="initial-refresh",
        expires_in=14124,
        obtained_at=FIXED_NOW,
    )


@pytest.fixture
def decoder() -> NotificationDecoder:
    return NotificationDecoder()


@pytest.fixture(autouse=True)
def _restore_event_templates():
    """Reload the bundled templates after tests that swap them out."""
    yield
    reload_event_templates()
