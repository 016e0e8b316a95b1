"""Password hashing and session tokens"""

from datetime import timedelta
from typing import Optional
from uuid import UUID

import bcrypt
from jose import JWTError, jwt

from app.config import settings
from app.utils.time import get_utc_now

ACCESS_TOKEN_TYPE = "access"

# bcrypt ignores input past 72 bytes and newer releases reject it outright
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    """UTF-8 bytes capped at the bcrypt limit without splitting a character."""
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES].decode("utf-8", "ignore").encode("utf-8")


def get_password_hash(password: str) -> str:
    """bcrypt hash of ``password``, as ASCII text for the users table."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("ascii")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("ascii"))
    except (ValueError, UnicodeEncodeError):
        # Stored value is not a bcrypt hash
        return False


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a session token for a driver.

    Args:
        subject: User id, stored as ``sub``
        expires_delta: Lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        Encoded JWT
    """
    issued_at = get_utc_now()
    lifetime = expires_delta if expires_delta is not None else timedelta(
        minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    claims = {
        "sub": subject,
        "iat": issued_at,
        "exp": issued_at + lifetime,
        "type": ACCESS_TOKEN_TYPE,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    """Verified claims, or None when the signature or expiry check fails."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None


def get_token_subject(token: str) -> Optional[UUID]:
    """
    User id carried by a valid access token.

    Verification is stateless: signature, expiry and token type only.
    Whether the user still exists is left to the services.
    """
    claims = decode_token(token)
    if not claims or claims.get("type") != ACCESS_TOKEN_TYPE:
        return None
    try:
        return UUID(str(claims.get("sub")))
    except ValueError:
        return None
