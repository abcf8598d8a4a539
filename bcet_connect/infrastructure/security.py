"""Security helpers for hashing and token generation."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from bcet_connect.config import get_settings

_ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[_ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def create_user_token(user_id: int, role: str, expires_delta: timedelta | None = None) -> str:
    """Issue the bearer token presented by HTTP clients and websocket handshakes."""

    return create_access_token({"sub": str(user_id), "role": role}, expires_delta)


def principal_id_from_claims(claims: dict) -> int:
    """Extract the numeric principal id from decoded token claims.

    Raises ``ValueError`` when the ``sub`` claim is missing or is not a positive
    integer, which callers treat the same as an invalid token.
    """

    subject = claims.get("sub")
    if subject is None or isinstance(subject, bool):
        raise ValueError("Token payload has no subject")
    try:
        principal_id = int(str(subject))
    except ValueError as exc:
        raise ValueError("Malformed principal id in token") from exc
    if principal_id <= 0:
        raise ValueError("Malformed principal id in token")
    return principal_id


__all__ = [
    "create_access_token",
    "create_user_token",
    "decode_access_token",
    "get_password_hash",
    "principal_id_from_claims",
    "verify_password",
]
