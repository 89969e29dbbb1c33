"""Security utilities: password hashing (passlib) and signed tokens (JWT)."""

from __future__ import annotations

import hashlib
import uuid
from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

from coachhub.core.config import get_settings
from coachhub.core.enums import TokenType

password_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class InvalidTokenError(Exception):
    """Token is malformed, expired, or of the wrong type."""


def hash_password(plain: str) -> str:
    return password_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    return password_context.verify(plain, hashed)


def password_fingerprint(password_hash: str) -> str:
    """Short digest of the stored hash; changes whenever the password does."""
    return hashlib.sha256(password_hash.encode()).hexdigest()[:16]


def _create_token(
    user_id: uuid.UUID, token_type: TokenType, expires_in: timedelta, **claims: str
) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "type": token_type.value,
        "iat": now,
        "exp": now + expires_in,
        **claims,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(user_id: uuid.UUID) -> str:
    settings = get_settings()
    return _create_token(
        user_id, TokenType.ACCESS, timedelta(minutes=settings.access_token_expire_minutes)
    )


def create_reset_token(user_id: uuid.UUID, password_hash: str) -> str:
    """Single-use: the token stops verifying once the password it was issued against changes."""
    settings = get_settings()
    return _create_token(
        user_id,
        TokenType.RESET,
        timedelta(minutes=settings.reset_token_expire_minutes),
        pwd=password_fingerprint(password_hash),
    )


def _decode(token: str, expected_type: TokenType) -> tuple[uuid.UUID, dict]:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError("Invalid token") from e
    if payload.get("type") != expected_type.value:
        raise InvalidTokenError("Invalid token type")
    try:
        return uuid.UUID(payload["sub"]), payload
    except (KeyError, ValueError) as e:
        raise InvalidTokenError("Invalid token subject") from e


def decode_token(token: str, expected_type: TokenType = TokenType.ACCESS) -> uuid.UUID:
    """Return the user id in a token, raising InvalidTokenError if it can't be trusted."""
    user_id, _ = _decode(token, expected_type)
    return user_id


def decode_reset_token(token: str) -> tuple[uuid.UUID, str | None]:
    """User id and password fingerprint carried by a reset token."""
    user_id, payload = _decode(token, TokenType.RESET)
    return user_id, payload.get("pwd")
