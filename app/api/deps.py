"""API Dependencies"""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.exceptions import AuthError, NotFoundError
from app.core.security import get_token_subject
from app.database import get_db

# Bearer scheme; a missing header is reported by get_current_user_id as 401
security = HTTPBearer(auto_error=False)

__all__ = ["get_db", "get_current_user_id", "parse_resource_id"]


async def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> UUID:
    """
    Identity of the caller, taken from the bearer token.

    Raises:
        AuthError: header missing, token invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Not authorized, no token")

    user_id = get_token_subject(credentials.credentials)
    if user_id is None:
        raise AuthError("Not authorized, token failed")

    request.state.user_id = user_id
    return user_id


def parse_resource_id(value: str, not_found_message: str) -> UUID:
    """Path ids that are not UUIDs cannot match any record."""
    try:
        return UUID(value)
    except ValueError:
        raise NotFoundError(not_found_message)
