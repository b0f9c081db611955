"""
Authentication utilities with JWT session tokens and bcrypt password hashing.

- bcrypt with salt for password hashing, cost factor from ``BCRYPT_ROUNDS``
- HS256 algorithm for signing the session token carried in the login cookie
- Configurable token expiration
- UTC timezone consistency
"""

from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt

from todo_app.config import settings


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a hashed password."""
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"), hashed_password.encode("utf-8")
        )
    except ValueError:
        # Stored value is not a bcrypt digest
        return False


def get_password_hash(password: str) -> str:
    """Hash a plain text password using bcrypt."""
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    hashed_password = bcrypt.hashpw(password=pwd_bytes, salt=salt)
    return hashed_password.decode("utf-8")


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token with the given data."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(
            minutes=settings.access_token_expire_minutes
        )

    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode and verify a JWT access token."""
    try:
        return jwt.decode(
            token, settings.secret_key, algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        return None


def create_session_token(username: str, roles: list[str]) -> str:
    """Session token for a signed-in user: subject plus role claims."""
    return create_access_token(data={"sub": username, "roles": roles})

