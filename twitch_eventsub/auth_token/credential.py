"""OAuth credential with expiry bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from ..constants import TOKEN_REFRESH_SAFETY_BUFFER_SECONDS
from ..errors.eventsub import AuthorisationError
from ..http.responses import TokenResponse


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, repr=False)
class Credential:
    """Access/refresh token pair.

    Immutable: a refresh produces a new Credential which replaces this one.

    Attributes:
        access_token: Token sent in the Authorization header.
        refresh_token: Token exchanged for a new access token.
        expires_in: Lifetime in seconds reported by Twitch when obtained.
        obtained_at: When the token was obtained (UTC).
    """

    access_token: str
    refresh_token: str
    expires_in: float
    obtained_at: datetime = field(default_factory=_now)

    @property
    def expires_at(self) -> datetime:
        """Expiry time, moved earlier by the configured safety buffer."""
        safe_expires = max(self.expires_in - TOKEN_REFRESH_SAFETY_BUFFER_SECONDS, 0)
        return self.obtained_at + timedelta(seconds=safe_expires)

    def seconds_remaining(self, now: datetime | None = None) -> float:
        return (self.expires_at - (now or _now())).total_seconds()

    def is_expired(self, now: datetime | None = None) -> bool:
        return self.seconds_remaining(now) <= 0

    @classmethod
    def from_token_response(
        cls,
        response: TokenResponse,
        fallback_refresh_token: str | None = None,
    ) -> Credential:
        """Build a Credential from a token exchange response.

        Args:
            response: Parsed token endpoint response.
            fallback_refresh_token: Refresh token kept when the response omits one.

        Raises:
            AuthorisationError: If neither the response nor the fallback
                provides a refresh token.
        """
        refresh_token = response.refresh_token or fallback_refresh_token
        if not refresh_token:
            raise AuthorisationError(
                "Token response did not include a refresh token",
                operation_type="token_exchange",
            )
        return cls(
            access_token=response.access_token,
            refresh_token=refresh_token,
            expires_in=float(response.expires_in),
        )

    def __repr__(self) -> str:
        return (
            f"Credential(access_token=***, refresh_token=***, "
            f"expires_in={self.expires_in}, obtained_at={self.obtained_at.isoformat()})"
        )
