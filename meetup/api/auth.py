"""
Authentication: HS256 JWT bearer credentials and the current-user dependency.

The token "sub" claim is the external provider id (google_id). A user seen
for the first time is created from the token's email/name claims, which is
how accounts come into existence after provider sign-in.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any, Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from meetup.api.deps import get_user_gateway
from meetup.config import Settings
from meetup.errors import Unauthorized
from meetup.models.user import User
from meetup.services.user_gateway import UserGateway

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def create_access_token(
    subject: str,
    settings: Settings,
    email: Optional[str] = None,
    name: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign a bearer token for the given provider id."""
    if not settings.jwt_secret:
        raise ValueError("jwt_secret must be set to issue tokens")
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    payload: dict[str, Any] = {"sub": subject, "iat": now, "exp": expire}
    if email:
        payload["email"] = email
    if name:
        payload["name"] = name
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """Verify signature and expiry; raise Unauthorized on any failure."""
    if not settings.jwt_secret:
        logger.warning("Rejecting token: jwt_secret is not configured")
        raise Unauthorized("Authentication not configured")
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.warning("JWT verification failed: %s", e)
        raise Unauthorized("Invalid token")


async def get_current_user(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    users: Annotated[UserGateway, Depends(get_user_gateway)],
) -> User:
    """
    Dependency: validate the bearer token and return the matching User,
    creating it on first sight.
    """
    if credentials is None:
        raise Unauthorized("Authentication required")

    payload = decode_access_token(credentials.credentials, request.app.state.settings)
    google_id = payload["sub"]

    user = await users.find_by_google_id(google_id)
    if user is not None:
        return user

    email: Optional[str] = payload.get("email")
    if not email:
        logger.warning("Token subject %s has no account and no email claim", google_id)
        raise Unauthorized("User not found for token")

    user = await users.create(
        {
            "email": email,
            "name": payload.get("name") or email.split("@")[0],
            "google_id": google_id,
        }
    )
    logger.info("Created new user for google_id=%s", google_id)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
