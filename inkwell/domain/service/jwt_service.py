"""JWT token domain service."""

import logfire
from pydantic import ValidationError as PydanticValidationError

from inkwell.config import AuthSettings
from inkwell.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, role: str = "user") -> str:
        """Create JWT token for user.

        Args:
            user_id: User ID
            role: User role

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id, role=role):
            token = create_token(user_id, role, self.auth_settings)
            logfire.info("JWT token created", user_id=user_id, role=role)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise
            except PydanticValidationError as e:
                logfire.warn("JWT token payload malformed", error=str(e))
                raise JWTError("Invalid token payload") from e
            logfire.debug(
                "JWT token verified", user_id=payload.user_id, role=payload.role
            )
            return payload

    def get_payload_from_token(self, token: str | None) -> TokenPayload | None:
        """Extract the token payload without raising.

        Args:
            token: JWT token string (optional)

        Returns:
            Payload if token is valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            return self.verify_token(token)
        except JWTError as e:
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None

    def is_moderator(self, payload: TokenPayload) -> bool:
        return payload.role in self.auth_settings.moderator_roles

    def is_admin(self, payload: TokenPayload) -> bool:
        return payload.role in self.auth_settings.admin_roles
