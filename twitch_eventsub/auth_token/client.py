"""Token exchange and validation HTTP client."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from ..constants import TWITCH_TOKEN_URL, TWITCH_VALIDATION_URL
from ..errors.eventsub import AuthorisationError, InvalidOauthToken, TokenRequiresRefreshing
from ..http.executor import RequestExecutor
from ..http.request import AuthType, TwitchHttpRequest
from ..http.responses import TokenResponse, Validation
from ..logs import logger
from ..utils import format_duration
from .credential import Credential


class TokenClient:
    """Client for Twitch's OAuth token endpoints.

    Handles refresh-token and authorisation-code exchanges (form encoded
    POSTs) and access token validation.
    """

    def __init__(self, client_id: str, client_secret: str, executor: RequestExecutor):
        """Initialize the token client.

        Args:
            client_id: Twitch application client ID.
            client_secret: Twitch application client secret.
            executor: Executor used for every request.
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self._executor = executor

    async def refresh(self, refresh_token: str) -> Credential:
        """Exchange a refresh token for a new Credential.

        The previous refresh token is kept when Twitch does not rotate it.

        Raises:
            AuthorisationError: If the response is malformed.
            InvalidOauthToken: If Twitch rejects the client credentials.
            TransportError: On any other HTTP or network failure.
        """
        form = [
            ("grant_type", "refresh_token"),
            ("refresh_token", refresh_token),
            ("client_id", self.client_id),
            ("client_secret", self.client_secret),
        ]
        credential = await self._token_query(form, "refresh_token", refresh_token)
        logger.log_event(
            "token",
            "refreshed",
            lifetime=format_duration(credential.expires_in),
        )
        return credential

    async def exchange_code(self, code: str, redirect_url: str) -> Credential:
        """Exchange an authorisation code for a user Credential.

        Raises:
            AuthorisationError: If the response is malformed or lacks a refresh token.
            InvalidOauthToken: If Twitch rejects the client credentials.
            TransportError: On any other HTTP or network failure.
        """
        form = [
            ("client_id", self.client_id),
            ("client_secret", self.client_secret),
            ("code", code),
            ("grant_type", "authorization_code"),
            ("redirect_uri", redirect_url),
        ]
        credential = await self._token_query(form, "authorization_code", None)
        logger.log_event(
            "token",
            "obtained",
            lifetime=format_duration(credential.expires_in),
        )
        return credential

    async def validate(self, access_token: str) -> Validation:
        """Introspect an access token.

        A rejected token is not an exception: the returned Validation is an
        error (``is_error()``) carrying Twitch's status and message.

        Raises:
            TransportError: On network failures or non-auth HTTP errors.
        """
        request = TwitchHttpRequest(
            url=TWITCH_VALIDATION_URL,
            method="GET",
            token=access_token,
            client_id=self.client_id,
            auth_type=AuthType.OAUTH,
        )
        try:
            body = await self._executor.execute(request)
        except TokenRequiresRefreshing as e:
            logger.log_event("token", "validation_failed", level=logging.INFO, status=401)
            return e.validation or Validation(status=401, message=str(e))
        try:
            validation = Validation.model_validate_json(body)
        except ValidationError as e:
            raise AuthorisationError(
                f"Unparseable validation response: {e.error_count()} errors",
                request=request,
                operation_type="validate",
            ) from e
        logger.log_event(
            "token",
            "valid",
            level=logging.DEBUG,
            remaining=format_duration(validation.expires_in),
        )
        return validation

    async def _token_query(
        self,
        form: list[tuple[str, str]],
        grant: str,
        fallback_refresh_token: str | None,
    ) -> Credential:
        request = TwitchHttpRequest.form_post(TWITCH_TOKEN_URL, form)
        try:
            body = await self._executor.execute(request)
        except TokenRequiresRefreshing as e:
            raise InvalidOauthToken(
                f"Token endpoint rejected {grant} grant: {e}",
                request=request,
                operation_type=grant,
            ) from e
        try:
            response = TokenResponse.model_validate_json(body)
        except ValidationError as e:
            logger.log_event("token", "malformed_response", level=logging.ERROR, grant=grant)
            raise AuthorisationError(
                f"Malformed {grant} token response: {e.error_count()} errors",
                request=request,
                operation_type=grant,
            ) from e
        return Credential.from_token_response(response, fallback_refresh_token)
