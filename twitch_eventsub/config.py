from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .subscriptions.condition import AccountIds

_REQUIRED_ENV = {
    "client_id": "TWITCH_CLIENT_ID",
    "client_secret": "TWITCH_CLIENT_SECRET",
    "redirect_url": "TWITCH_REDIRECT_URL",
    "broadcaster_id": "TWITCH_BROADCASTER_ID",
}
_OPTIONAL_ENV = {
    "moderator_id": "TWITCH_MODERATOR_ID",
    "user_id": "TWITCH_USER_ID",
}


class ClientSettings(BaseModel):
    """Application credentials and account identifiers for the EventSub client.

    Attributes:
        client_id: Twitch application client ID.
        client_secret: Twitch application client secret.
        redirect_url: Redirect URL registered for the authorisation code flow.
        broadcaster_id: Account id of the broadcaster the client acts for.
        moderator_id: Optional moderator account id (defaults to the broadcaster).
        user_id: Optional user account id (defaults to the broadcaster).
    """

    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1)
    redirect_url: str = Field(min_length=1)
    broadcaster_id: str = Field(min_length=1)
    moderator_id: str | None = None
    user_id: str | None = None

    @field_validator("client_id", "client_secret", "redirect_url", "broadcaster_id")
    @classmethod
    def strip_value(cls, v: str) -> str:
        """Strip surrounding whitespace and reject blank values."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("value must not be blank")
        return stripped

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClientSettings:
        return cls.model_validate(dict(data))

    def account_ids(self) -> AccountIds:
        """Return the account identifiers used to build subscription conditions."""
        return AccountIds(
            broadcaster_id=self.broadcaster_id,
            moderator_id=self.moderator_id,
            user_id=self.user_id,
        )


def load_settings(environ: Mapping[str, str] | None = None) -> ClientSettings:
    """Load ClientSettings from environment variables.

    Args:
        environ: Mapping to read from; defaults to ``os.environ``.

    Returns:
        Validated ClientSettings.

    Raises:
        ValueError: If any required variable is missing or blank. The message
            lists every missing variable.
    """
    env = os.environ if environ is None else environ
    missing = [
        var for var in _REQUIRED_ENV.values() if not (env.get(var) or "").strip()
    ]
    if missing:
        raise ValueError(f"Missing required environment variables: {', '.join(missing)}")
    data: dict[str, Any] = {field: env[var] for field, var in _REQUIRED_ENV.items()}
    for field, var in _OPTIONAL_ENV.items():
        value = (env.get(var) or "").strip()
        if value:
            data[field] = value
    return ClientSettings.from_dict(data)
