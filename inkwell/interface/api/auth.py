"""Cookie-based authentication helpers for routes."""

from fastapi import HTTPException, status

from inkwell.domain.service import JWTService
from inkwell.util.jwt import TokenPayload


def authenticate(jwt_service: JWTService, auth_token: str | None) -> TokenPayload:
    """Resolve the caller from the ``auth_token`` cookie.

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    payload = jwt_service.get_payload_from_token(auth_token)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return payload


def require_moderator(
    jwt_service: JWTService, auth_token: str | None
) -> TokenPayload:
    """Like ``authenticate`` but also requires a moderator or admin role.

    Raises:
        HTTPException: 401 if unauthenticated, 403 if not a moderator
    """
    payload = authenticate(jwt_service, auth_token)
    if not jwt_service.is_moderator(payload):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Moderator role required",
        )
    return payload


def require_admin(jwt_service: JWTService, auth_token: str | None) -> TokenPayload:
    """Like ``authenticate`` but also requires the admin role.

    Raises:
        HTTPException: 401 if unauthenticated, 403 if not an admin
    """
    payload = authenticate(jwt_service, auth_token)
    if not jwt_service.is_admin(payload):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required",
        )
    return payload
