"""Response shapes returned by the Twitch OAuth endpoints."""

from __future__ import annotations

from pydantic import BaseModel


class Validation(BaseModel):
    """Token introspection result, also the shape of Twitch error bodies.

    Presence of ``status`` marks an error.
    """

    client_id: str | None = None
    login: str | None = None
    scopes: list[str] | None = None
    user_id: str | None = None
    expires_in: int | None = None
    status: int | None = None
    message: str | None = None

    def is_error(self) -> bool:
        return self.status is not None

    def error_msg(self) -> str:
        if not self.is_error():
            raise AssertionError("error message requested from a successful validation")
        return f"status: {self.status}, message: {self.message}"


class TokenResponse(BaseModel):
    access_token: str
    expires_in: int
    token_type: str
    refresh_token: str | None = None
    scope: list[str] | None = None
