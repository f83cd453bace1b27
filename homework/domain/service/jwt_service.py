"""JWT token domain service."""

from uuid import UUID

import logfire

from homework.config import AuthSettings
from homework.domain.value import UserId
from homework.util.jwt import JWTError, TokenPayload, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for verifying bearer tokens."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.debug("JWT token verified", user_id=payload.user_id)
                return payload
            except Exception as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def get_user_id_from_header(self, authorization: str | None) -> UserId | None:
        """Extract the user ID from an ``Authorization: Bearer`` header.

        Convenience for routes that authenticate optionally: a missing,
        malformed or invalid token yields None instead of raising.

        Args:
            authorization: Raw Authorization header value

        Returns:
            User ID if the token is valid, None otherwise
        """
        if not authorization:
            return None

        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token:
            return None

        try:
            payload = self.verify_token(token.strip())
            return UserId(UUID(payload.user_id))
        except (JWTError, ValueError) as e:
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
